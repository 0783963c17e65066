"""Task tracker: a FastAPI service storing task records in Firestore."""
