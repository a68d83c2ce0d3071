"""Infrastructure adapters (database, artifact storage)"""
