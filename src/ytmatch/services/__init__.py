"""Services for ytmatch."""

from ytmatch.services.collection import CollectionSink, JSONCollectionWriter
from ytmatch.services.csv_parser import CSVPlaylistParser
from ytmatch.services.importer import PlaylistImporter, ProgressCallback
from ytmatch.services.resolver import MatchDecision, MatchResolver

__all__ = [
    "CSVPlaylistParser",
    "CollectionSink",
    "JSONCollectionWriter",
    "MatchDecision",
    "MatchResolver",
    "PlaylistImporter",
    "ProgressCallback",
]
