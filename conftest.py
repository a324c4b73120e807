import os

# Keep the app's import-time schema setup off the working directory.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
