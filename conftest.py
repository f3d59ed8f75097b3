"""Root conftest: zero delays so tests never sleep."""

import os

os.environ.setdefault("DAFT_PAGE_DELAY", "0")
os.environ.setdefault("DAFT_DETAIL_DELAY", "0")
os.environ.setdefault("DAFT_RETRY_DELAY", "0")
os.environ.setdefault("DAFT_API_KEY", "")
