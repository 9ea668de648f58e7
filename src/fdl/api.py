"""
Job wrapper for running FDL listings on a thread pool.

    with DefinitionLanguageAPI() as api:
        future = api.process('Patient["john"].name.family = "Doe";')
        bundle = future.result()

Every job runs a fresh pipeline, so jobs share nothing but the provider's
read-only registry. A job whose listing has errors fails its future with
FdlException.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Mapping, Optional

from .config import Settings
from .errors import FdlException
from .models import Bundle
from .runtime import ElementProvider, ModelElementProvider, compile_and_run
from .types import TypeService

logger = logging.getLogger(__name__)

THREAD_NAME = "fdl-thread"
PLACEHOLDER = "$"


def hydrate(entries: Mapping[str, str]) -> str:
    """
    Build a listing from statement templates.

    Each key is a statement with a '$' placeholder that is replaced by the
    quoted value; statements are joined one per line.

        hydrate({'Patient.name.family = $;': 'Smith'})
        -> 'Patient.name.family = "Smith";\\n'
    """
    lines = []
    for template, value in entries.items():
        lines.append(template.replace(PLACEHOLDER, f'"{value}"') + "\n")
    return "".join(lines)


class DefinitionLanguageAPI:
    """Runs listings concurrently and hands back bundles as futures."""

    def __init__(self, settings: Optional[Settings] = None,
                 provider_factory: Optional[Callable[[], ElementProvider]] = None):
        self.settings = settings if settings is not None else Settings()
        self._provider_factory = provider_factory or self._default_provider
        logger.debug("Creating '%s' thread pool.", THREAD_NAME)
        self._executor = ThreadPoolExecutor(max_workers=self.settings.pool_size,
                                            thread_name_prefix=THREAD_NAME)

    def _default_provider(self) -> ElementProvider:
        return ModelElementProvider(type_service=TypeService(self.settings.date_formats))

    def run(self, source: str) -> Bundle:
        """Run a listing synchronously in the calling thread.

        Raises:
            FdlException: If the listing has static or runtime errors
        """
        start = time.perf_counter()
        result = compile_and_run(source, self._provider_factory(), self.settings)
        if result.has_errors:
            raise FdlException("\n" + result.format_errors() + "\n",
                               result.static_errors, result.runtime_errors)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info("Bundle generated in %d ms", elapsed_ms)
        return result.bundle

    def process(self, source: str) -> "Future[Bundle]":
        """Submit a listing; the future resolves to its bundle."""
        return self._executor.submit(self.run, source)

    def process_entries(self, entries: Mapping[str, str]) -> "Future[Bundle]":
        """Submit a listing built from '$' statement templates."""
        return self._executor.submit(self.run, hydrate(entries))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "DefinitionLanguageAPI":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
