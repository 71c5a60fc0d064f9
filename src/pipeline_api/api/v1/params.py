"""Path and query parameter aliases shared by the v1 routers."""

from typing import Annotated

from fastapi import Path, Query

Srid = Annotated[
    str,
    Path(min_length=1, max_length=100, description="Scope the resource belongs to"),
]
AssignmentId = Annotated[str, Path(min_length=1, max_length=100)]
TaskId = Annotated[str, Path(min_length=1, max_length=100)]
ReleaseId = Annotated[str, Path(min_length=1, max_length=100)]
SetId = Annotated[str, Path(min_length=1, max_length=100)]

ApplicationFilter = Annotated[
    str | None, Query(description="Only resources of this application; blank is ignored")
]
StatusFilter = Annotated[
    str | None,
    Query(alias="status", description="Only resources in this status; blank is ignored"),
]
