"""mediaquery core package.

Matches noisy media filenames to TMDB movies and TV series:

- **matcher**: sanitizing, search-term reduction, scoring and the two-direction search
- **parsers.episode**: season/episode extraction from TV filenames
- **tmdb**: HTTP client and response models for the TMDB API
- **translators**: movie/TV detail records for a confirmed match
- **resolver**: the end-to-end ``MediaResolver``

The main entry point is ``MediaResolver.lookup``.
"""

from .errors import InputError, MediaQueryError, NoMatchError, ProviderProtocolError
from .models import Direction, EpisodeDescriptor, MatchDecision, ResolvedMedia
from .resolver import MediaResolver

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Direction",
    "EpisodeDescriptor",
    "InputError",
    "MatchDecision",
    "MediaQueryError",
    "MediaResolver",
    "NoMatchError",
    "ProviderProtocolError",
    "ResolvedMedia",
]
