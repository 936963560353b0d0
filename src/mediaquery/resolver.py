"""End-to-end lookup: filename in, matched and translated provider record out."""

from __future__ import annotations

import logging
from typing import Optional

from .config import AppConfig
from .logging_utils import render_fields_block
from .matcher.engine import QueryEngine
from .matcher.reconciler import Reconciler
from .matcher.terms import IGNORED_TOKENS
from .models import EpisodeDescriptor, ResolvedMedia
from .tmdb.client import TMDBClient, TMDBNotFoundError
from .translators import TVTranslator, get_translator

LOGGER = logging.getLogger(__name__)


class MediaResolver:
    """Resolves filenames to TMDB records.

    The resolver owns the client it builds from configuration; pass an
    existing ``client`` to share one.
    """

    def __init__(self, config: AppConfig, *, client: Optional[TMDBClient] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self.client = client or TMDBClient(config.tmdb)

        search = config.search
        self.engine = QueryEngine(
            self.client,
            rate_limit_backoff=search.rate_limit_backoff,
            substring_search=search.substring_search,
            ignored_tokens=IGNORED_TOKENS | frozenset(search.extra_ignored_tokens),
        )
        self.reconciler = Reconciler(self.engine, parallel=search.parallel_directions)

    def lookup(self, filename: str, media_type: str, year: Optional[int] = None) -> ResolvedMedia:
        """Match ``filename`` and fetch the details of the chosen record.

        Raises:
            InputError: if nothing usable could be matched
            ProviderProtocolError: if the provider search misbehaves
            TMDBError: if the details lookup fails
        """
        decision = self.reconciler.resolve(filename, media_type, year)
        LOGGER.info(
            render_fields_block(
                "Match",
                [
                    ("File", decision.filename),
                    ("Type", decision.media_type),
                    ("Name", decision.name),
                    ("TMDB id", decision.provider_id),
                    ("Score", decision.match_score),
                    ("Year match", "yes" if decision.year_matches else "no"),
                ],
            )
        )

        translator = get_translator(media_type, self.client)
        resolved = ResolvedMedia(decision=decision, details=translator.get_details(decision.provider_id))

        if isinstance(translator, TVTranslator):
            resolved.episode = self._episode_for(translator, decision.provider_id, filename)

        return resolved

    def _episode_for(self, translator: TVTranslator, series_id: int, filename: str) -> Optional[EpisodeDescriptor]:
        episode = translator.parse_episode(filename)
        if episode is None:
            LOGGER.debug("No episode descriptor in %s", filename)
            return None

        try:
            info = self.client.get_episode_info(series_id, episode.season_number, episode.episode_number)
        except TMDBNotFoundError:
            LOGGER.warning(
                "Episode S%02dE%02d not found for series %s",
                episode.season_number,
                episode.episode_number,
                series_id,
            )
            return episode

        episode.name = info.name
        episode.overview = info.overview
        episode.image = self.client.image_url(info.still_path)
        episode.guest_stars = [star.model_dump(exclude_none=True) for star in info.guest_stars]
        return episode

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> MediaResolver:
        return self

    def __exit__(self, *args) -> None:
        self.close()
