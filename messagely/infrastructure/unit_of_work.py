# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transactional session scope for repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from messagely.shared.errors.base import StoreError
from messagely.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a session inside one transaction.

    The transaction commits when the block exits cleanly and rolls back
    otherwise. Integrity violations propagate unchanged so repositories can
    translate them; any other SQLAlchemy failure surfaces as :class:`StoreError`.
    """

    try:
        with factory() as session, session.begin():
            yield session
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        logger.error(f"uow: store failure {type(exc).__name__}")
        raise StoreError() from exc


__all__ = ["unit_of_work_scope"]
