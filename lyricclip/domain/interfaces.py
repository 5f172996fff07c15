# lyricclip/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import List

from .models import Track, Video


class LyricsSearchPort(ABC):
    """
    Port for any lyrics search provider.
    Returns tracks in the provider's ranking order.
    """

    @abstractmethod
    def search_tracks(self, query: str, limit: int) -> List[Track]: ...


class VideoSearchPort(ABC):

    @abstractmethod
    def search_videos(self, query: str, limit: int) -> List[Video]: ...
