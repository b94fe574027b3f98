"""tube-u — YouTube video and playlist stream downloader.

Built on the yt-dlp Python API and the YouTube Data API with a strict
layered architecture.
"""

from tube_u.version import __version__

__all__: list[str] = ["__version__"]
