import os

os.environ.setdefault("PIECE_TABLE_DISABLE_CONSOLE", "1")
