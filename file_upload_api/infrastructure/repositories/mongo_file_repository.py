from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import DESCENDING
from pymongo.errors import DocumentTooLarge, PyMongoError

from shared.config.settings import settings
from shared.models.stored_file import StoredFile
from shared.utils.exceptions import PayloadTooLargeException, StorageException
from shared.utils.logging_config import get_logger
from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface


logger = get_logger(__name__)

# Excluded from listings so the page never drags payload bytes over the wire
LIST_PROJECTION = {"data": 0}
# Mongo keeps datetimes to the millisecond, _id orders uploads within one
LIST_SORT = [("upload_date", DESCENDING), ("_id", DESCENDING)]

class MongoFileRepository(FileRepositoryInterface):

    def __init__(self, mongo_uri: str = None, database_name: str = None,
                 collection_name: str = None, client: AsyncIOMotorClient = None,
                 server_selection_timeout_ms: int = None, max_upload_size_bytes: int = None):

        self.mongo_uri = mongo_uri or settings.mongo_uri
        self.collection_name = collection_name or settings.files_collection_name
        self.max_upload_size_bytes = max_upload_size_bytes or settings.max_upload_size_bytes

        self.client = client or AsyncIOMotorClient(
            self.mongo_uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms or settings.mongo_server_selection_timeout_ms
        )
        self.database = self.client.get_default_database(default=database_name or settings.mongo_database)
        self.collection = self.database[self.collection_name]

    async def insert_file(self, stored_file: StoredFile) -> str:
        """Insert a StoredFile document and return the generated ObjectId as a string."""
        logger.info(f"Saving file '{stored_file.original_name}' ({stored_file.size} bytes) to MongoDB...")
        document = stored_file.to_dict()
        try:
            result = await self.collection.insert_one(document)
        except DocumentTooLarge as e:
            logger.error(f"Document rejected by MongoDB as too large: {e}")
            raise PayloadTooLargeException(stored_file.size, self.max_upload_size_bytes) from e
        except PyMongoError as e:
            logger.error(f"Error saving file to MongoDB: {e}")
            raise StorageException(f"Could not save file '{stored_file.original_name}'") from e

        file_id = str(result.inserted_id)
        stored_file.file_id = file_id
        logger.info(f"File saved successfully. Id: {file_id}")
        return file_id

    async def get_file(self, file_id: str) -> StoredFile | None:
        """Retrieve a StoredFile by id. Malformed ids are treated as unknown."""
        if not ObjectId.is_valid(file_id):
            logger.info(f"Rejecting malformed file id: {file_id}")
            return None

        try:
            document = await self.collection.find_one({"_id": ObjectId(file_id)})
        except PyMongoError as e:
            logger.error(f"Error retrieving file {file_id} from MongoDB: {e}")
            raise StorageException(f"Could not retrieve file {file_id}") from e

        if document is None:
            return None
        return StoredFile.from_dict(document)

    async def list_files(self) -> list[StoredFile]:
        """List file metadata, newest first, without payload bytes."""
        try:
            cursor = self.collection.find({}, projection=LIST_PROJECTION).sort(LIST_SORT)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing files from MongoDB: {e}")
            raise StorageException("Could not list files") from e

        return [StoredFile.from_dict(document) for document in documents]

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close the MongoDB client."""
        if self.client:
            self.client.close()
            logger.info("MongoDB client closed.")
