from .mongo_client import MongoConnection, get_mongo_client, open_connection

__all__ = ["MongoConnection", "get_mongo_client", "open_connection"]
