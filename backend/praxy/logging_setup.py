from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level_name: str = "INFO", file_path: Optional[str] = None) -> None:
	level = getattr(logging, str(level_name).upper(), logging.INFO)
	formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

	root = logging.getLogger()
	root.setLevel(level)
	if not any(getattr(h, "_praxy", False) for h in root.handlers):
		stream = logging.StreamHandler()
		stream.setFormatter(formatter)
		stream._praxy = True  # type: ignore[attr-defined]
		root.addHandler(stream)

	if file_path:
		path = Path(file_path)
		path.parent.mkdir(parents=True, exist_ok=True)
		handler = RotatingFileHandler(path, maxBytes=1_048_576, backupCount=5, encoding="utf-8")
		handler.setFormatter(formatter)
		handler._praxy = True  # type: ignore[attr-defined]
		root.addHandler(handler)

	# httpx logs every request at INFO
	logging.getLogger("httpx").setLevel(logging.WARNING)
