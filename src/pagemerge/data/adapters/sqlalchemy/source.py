# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Async SQLAlchemy page source."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from pagemerge.data.page import Page
from pagemerge.data.pageable import Pageable
from pagemerge.kernel.exceptions import InvalidPageRequestException

logger = structlog.get_logger("pagemerge.data.adapters.sqlalchemy")

T = TypeVar("T")


class SqlAlchemyPageSource(Generic[T]):
    """Serves pages of one mapped table through an ``AsyncSession``.

    The window is ``OFFSET pageable.offset LIMIT pageable.size``, so
    offset-adjusted requests land on the exact row they address. Rows are
    ordered by the requested sort and then by primary key, so equal sort
    values still page deterministically.
    Optional *criteria* are applied to both the count and the page query.

    Usage:
        live = SqlAlchemyPageSource(LiveDrive, session)
        page = await live(Pageable.of(0, 20, Sort.of(Order.desc("timestamp"))))
    """

    def __init__(self, model: type[T], session: AsyncSession, *criteria: Any) -> None:
        self._model = model
        self._session = session
        self._criteria = criteria

    async def __call__(self, pageable: Pageable) -> Page[T]:
        base = select(self._model)
        for criterion in self._criteria:
            base = base.where(criterion)

        count_stmt = select(func.count()).select_from(base.subquery())
        total_result = await self._session.execute(count_stmt)
        total = total_result.scalar_one()

        stmt = base
        for order in pageable.sort.orders:
            col = getattr(self._model, order.property, None)
            if col is None:
                raise InvalidPageRequestException(
                    f"Unknown sort property '{order.property}' on {self._model.__name__}",
                    code="PAGE_SORT",
                    context={"property": order.property, "model": self._model.__name__},
                )
            stmt = stmt.order_by(col.asc() if order.direction == "asc" else col.desc())
        # Primary key breaks ties so OFFSET windows never overlap or leave gaps.
        stmt = stmt.order_by(*sa_inspect(self._model).primary_key)

        stmt = stmt.offset(pageable.offset).limit(pageable.size)
        result = await self._session.execute(stmt)
        items = list(result.scalars().all())

        logger.debug(
            "page_source.fetched",
            model=self._model.__name__,
            offset=pageable.offset,
            size=pageable.size,
            returned=len(items),
            total=total,
        )
        return Page(content=items, total=total, pageable=pageable)
