"""Progress bar for batch sanitizing."""

from threading import RLock

from tqdm import tqdm


class BatchProgress:
    """Progress bar over a batch of paths, with changed/failed counters."""

    def __init__(
        self,
        total_paths: int,
        show_progress: bool = True,
    ) -> None:
        self.total_paths = total_paths
        self._lock = RLock()
        self._completed = 0
        self._changed = 0
        self._failed = 0

        self._pbar: tqdm | None  # type: ignore[type-arg]
        if show_progress:
            self._pbar = tqdm(
                total=total_paths,
                unit="path",
                desc=f"Sanitizing {total_paths} paths",
                ncols=80,
            )
        else:
            self._pbar = None

    def update(self, changed: bool = False, failed: bool = False) -> None:
        with self._lock:
            self._completed += 1
            if changed:
                self._changed += 1
            if failed:
                self._failed += 1
            if self._pbar is not None:
                self._pbar.update(1)
                self._pbar.set_postfix(changed=self._changed, refresh=False)

    def close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def changed(self) -> int:
        with self._lock:
            return self._changed

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed
