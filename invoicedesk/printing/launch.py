import logging
import os
import subprocess
import sys

logger = logging.getLogger(__name__)


def open_file(path):
	"""Open a file (or folder) with the desktop's default application."""
	try:
		if sys.platform == "win32":
			os.startfile(path)
		elif sys.platform == "darwin":
			subprocess.Popen(["open", str(path)])
		else:
			subprocess.Popen(["xdg-open", str(path)])
		return True
	except Exception:
		logger.exception("Failed to open file: %s", path)
		return False
