from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Resource(Generic[M]):
    """A router exposing CRUD routes plus the collection those routes act on."""

    router: APIRouter
    collection: AsyncIOMotorCollection
    schema: Type[M]
    name: str


class SkipLimitQuery(BaseModel):
    skip: Optional[int] = None
    limit: Optional[int] = None


def to_jsonable(value: Any) -> Any:
    """Render a store result as plain JSON (ObjectId -> hex string)."""
    return jsonable_encoder(value, custom_encoder={ObjectId: str})


def _bad_request(errors: list[dict[str, Any]]) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors)


def parse_object_id(raw: str) -> ObjectId:
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        raise _bad_request(
            [
                {
                    "type": "object_id",
                    "loc": ["path", "id"],
                    "msg": "Value is not a valid ObjectId",
                    "input": raw,
                }
            ]
        ) from None


async def validate_body(request: Request, schema: Type[M]) -> M:
    """
    Parse the request body as JSON and validate it against ``schema``.

    Anything that fails here (malformed JSON included) is a 400 carrying
    pydantic's error list.
    """
    try:
        payload = await request.json()
    except ValueError as exc:
        raise _bad_request(
            [{"type": "json_invalid", "loc": ["body"], "msg": f"Invalid JSON: {exc}", "input": None}]
        ) from exc
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        logger.debug(
            "Rejected %s %s: %d validation error(s)",
            request.method,
            request.url.path,
            exc.error_count(),
        )
        raise _bad_request(json.loads(exc.json(include_url=False))) from exc


def create_resource(
    schema: Type[M],
    db: AsyncIOMotorDatabase,
    collection_name: str,
    *,
    tags: Optional[Sequence[str]] = None,
) -> Resource[M]:
    """
    Bind ``schema`` to ``db[collection_name]`` and build a router with:

        GET    /       list documents (optional ``skip`` / ``limit``)
        GET    /{id}   fetch one document
        POST   /       validate and insert
        PUT    /{id}   validate and $set onto an existing document
        DELETE /{id}   delete one document

    Mount the router wherever you like, e.g.
    ``app.include_router(resource.router, prefix="/posts")``.
    Every handler is a single pass-through call to the collection; results
    are returned as the store hands them back (``null`` when nothing matched).
    Bodies are stored in their JSON form, so URLs, decimals, UUIDs and enums
    land in the collection as strings/numbers BSON can encode.
    """
    collection: AsyncIOMotorCollection = db[collection_name]
    router = APIRouter(tags=list(tags) if tags else [collection_name])

    @router.get("/", name=f"list_{collection_name}")
    async def list_documents(
        skip: Optional[int] = Query(None, ge=0),
        limit: Optional[int] = Query(None, ge=0),
    ):
        query = SkipLimitQuery(skip=skip, limit=limit)
        cursor = collection.find()
        # 0 means "not applied", same as leaving the parameter out
        if query.skip:
            cursor = cursor.skip(query.skip)
        if query.limit:
            cursor = cursor.limit(query.limit)
        docs = await cursor.to_list(length=None)
        return to_jsonable(docs)

    @router.get("/{id}", name=f"get_{collection_name}")
    async def get_document(id: str):
        doc = await collection.find_one({"_id": parse_object_id(id)})
        return to_jsonable(doc)

    @router.post("/", name=f"create_{collection_name}")
    async def create_document(request: Request):
        data = await validate_body(request, schema)
        result = await collection.insert_one(data.model_dump(mode="json"))
        logger.debug("Inserted %s into '%s'", result.inserted_id, collection_name)
        return {"acknowledged": result.acknowledged, "inserted_id": str(result.inserted_id)}

    @router.put("/{id}", name=f"update_{collection_name}")
    async def update_document(id: str, request: Request):
        oid = parse_object_id(id)
        data = await validate_body(request, schema)
        changes = data.model_dump(mode="json", exclude_unset=True)
        result = await collection.find_one_and_update({"_id": oid}, {"$set": changes})
        return to_jsonable(result)

    @router.delete("/{id}", name=f"delete_{collection_name}")
    async def delete_document(id: str):
        result = await collection.find_one_and_delete({"_id": parse_object_id(id)})
        return to_jsonable(result)

    logger.info(
        "Resource '%s' created (schema=%s)",
        collection_name,
        schema.__name__,
        extra={"collection": collection_name},
    )
    return Resource(router=router, collection=collection, schema=schema, name=collection_name)
