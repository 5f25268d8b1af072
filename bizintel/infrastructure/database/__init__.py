"""
Database package - Infrastructure Layer

MongoDB connection handling for the decision pipeline.
"""

from bizintel.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
