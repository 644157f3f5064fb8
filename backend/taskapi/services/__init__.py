"""Service layer.

Use-case orchestration lives in :mod:`taskapi.services.auth` and
:mod:`taskapi.services.tasks`; shared primitives (base service, errors and
ports) live in :mod:`taskapi.services._shared`.
"""
