"""Course marketplace backend: the HTTP API under `src.api` and shared runtime helpers under `src.common`."""
