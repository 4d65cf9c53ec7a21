from logging import getLogger

from lightroom2aftershot.aftershot_document import AftershotDocument, convert
from lightroom2aftershot.core.lightroom import LightroomPreset
from lightroom2aftershot.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = ["AftershotDocument", "LightroomPreset", "convert"]
