from redsaver.repos.inmemory import InMemoryRepo
from redsaver.repos.mongo import MongoRepo

__all__ = ["InMemoryRepo", "MongoRepo"]
