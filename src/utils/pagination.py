from sqlmodel import select, func
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import TypeVar, Generic, List, Sequence, Tuple, Any
from sqlalchemy.sql.selectable import Select


T = TypeVar("T")

# Largest value a signed 64-bit LIMIT/OFFSET parameter can carry
SQL_MAX_INT = 2**63 - 1


class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    current_page: int
    limit: int
    total: int


def clamp_limit(limit: int) -> int:
    return min(limit, SQL_MAX_INT)


async def paginate(
        session: AsyncSession,
        statement: Select,
        page: int,
        limit: int) -> Tuple[Sequence[Any], int]:
    """Run ``statement`` for one page and count every row it matches.

    The statement must already carry its filters and ``order_by``; the count
    is taken over the unpaginated statement so it reflects the filtered total.
    Returns the page's rows and that total. A page starting past the last row
    comes back empty without being queried.
    """
    count_query = select(func.count()).select_from(statement.order_by(None).subquery())

    total_result = await session.exec(count_query)
    total = total_result.one()

    offset = (page - 1) * limit
    if offset >= total:
        return [], total

    query = (
        statement
        .limit(clamp_limit(limit))
        .offset(offset)
    )

    results = await session.exec(query)
    rows = results.all()

    return rows, total
