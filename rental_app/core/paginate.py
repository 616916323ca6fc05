from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PageParams(BaseModel):
    page: int = 1
    limit: int = 12

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginatePage:
    def params(self, page: int | None, limit: int | None, default_limit: int) -> PageParams:
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else default_limit
        return PageParams(page=page, limit=min(limit, 100))

    def meta(self, params: PageParams, total: int) -> PageMeta:
        return PageMeta(page=params.page, limit=params.limit, total=total)
