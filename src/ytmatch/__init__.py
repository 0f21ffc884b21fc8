"""ytmatch - Resolve exported track lists to YouTube Music songs.

This library takes loosely structured track descriptions (title, artist,
optional album, duration and external id) from a third-party playlist
export and finds the best matching song in YouTube Music for each one.

Examples:
    Import a CSV export:
    ```python
    from pathlib import Path
    from ytmatch import CSVPlaylistParser, create_importer

    records = CSVPlaylistParser().parse(Path("export.csv"), "Track", "Artist")
    importer = create_importer()
    result = importer.import_tracks(records, on_progress=print, name="Road trip")
    ```
"""

from ytmatch.client import CandidateSource, YTMusicClient
from ytmatch.config import APIConfig, ImportConfig, MatchWeights
from ytmatch.exceptions import (
    APIError,
    CancellationError,
    CandidateParseError,
    CollectionWriteError,
    CSVParseError,
    YTMatchError,
)
from ytmatch.models import (
    Candidate,
    CandidateArtist,
    FailedTrack,
    FailureReason,
    ImportComplete,
    ImportFailure,
    ImportInProgress,
    ImportRecord,
    ImportResult,
    ImportStatus,
    MatchStage,
    ResolvedTrack,
)
from ytmatch.models.cancel import CancelToken
from ytmatch.services import (
    CollectionSink,
    CSVPlaylistParser,
    JSONCollectionWriter,
    MatchResolver,
    PlaylistImporter,
)


def create_importer(
    config: ImportConfig | None = None,
    api_config: APIConfig | None = None,
    *,
    source: CandidateSource | None = None,
    sink: CollectionSink | None = None,
) -> PlaylistImporter:
    """Create a configured playlist importer.

    This is the recommended way to create an importer for library usage.
    It handles client and resolver instantiation internally.

    Args:
        config: Optional import configuration. Uses defaults if not provided.
        api_config: Optional YouTube Music API configuration.
        source: Optional candidate source. Creates a YTMusicClient if not
            provided.
        sink: Optional persistence for resolved tracks.

    Returns:
        A configured PlaylistImporter instance.

    Examples:
        Stricter matching:
        ```python
        importer = create_importer(ImportConfig(min_score=80))
        ```

        Writing the result to disk:
        ```python
        importer = create_importer(sink=JSONCollectionWriter(Path("out.json")))
        ```
    """
    config = config or ImportConfig()
    if source is None:
        source = YTMusicClient(config=api_config)
    resolver = MatchResolver(source, config)
    return PlaylistImporter(resolver, config, sink=sink)


__all__ = [
    "APIConfig",
    "APIError",
    "CSVParseError",
    "CSVPlaylistParser",
    "CancelToken",
    "CancellationError",
    "Candidate",
    "CandidateArtist",
    "CandidateParseError",
    "CandidateSource",
    "CollectionSink",
    "CollectionWriteError",
    "FailedTrack",
    "FailureReason",
    "ImportComplete",
    "ImportConfig",
    "ImportFailure",
    "ImportInProgress",
    "ImportRecord",
    "ImportResult",
    "ImportStatus",
    "JSONCollectionWriter",
    "MatchResolver",
    "MatchStage",
    "MatchWeights",
    "PlaylistImporter",
    "ResolvedTrack",
    "YTMatchError",
    "YTMusicClient",
    "create_importer",
]
