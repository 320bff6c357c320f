"""
DevCamper Backend — Bootcamp Route Handlers
=============================================

What:  One handler per CRUD verb for the bootcamp resource.
How:   Each handler answers 200 with the fixed success envelope
       {"success": true, "msg": ...}. They do not read the body, validate
       the id or touch the database yet.

Route Inventory:
    GET    /api/v1/bootcamps        list bootcamps        (public)
    GET    /api/v1/bootcamps/{id}   get one bootcamp      (public)
    POST   /api/v1/bootcamps        create a bootcamp     (private)
    PUT    /api/v1/bootcamps/{id}   update a bootcamp     (private)
    DELETE /api/v1/bootcamps/{id}   delete a bootcamp     (private)
"""

import logging

from fastapi import APIRouter

from devcamper.schemas.bootcamp import BootcampMessageResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/bootcamps",
    tags=["Bootcamps"],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)


@router.get("", response_model=BootcampMessageResponse, summary="Get all bootcamps")
async def get_bootcamps() -> BootcampMessageResponse:
    return BootcampMessageResponse(msg="Show all bootcamps")


@router.get(
    "/{bootcamp_id}",
    response_model=BootcampMessageResponse,
    summary="Get a single bootcamp",
)
async def get_bootcamp(bootcamp_id: str) -> BootcampMessageResponse:
    logger.debug("Get bootcamp %s", bootcamp_id)
    return BootcampMessageResponse(msg="display bootcamp")


@router.post("", response_model=BootcampMessageResponse, summary="Create new bootcamp")
async def create_bootcamp() -> BootcampMessageResponse:
    return BootcampMessageResponse(msg="Create new bootcamp")


@router.put(
    "/{bootcamp_id}",
    response_model=BootcampMessageResponse,
    summary="Update bootcamp",
)
async def update_bootcamp(bootcamp_id: str) -> BootcampMessageResponse:
    logger.debug("Update bootcamp %s", bootcamp_id)
    return BootcampMessageResponse(msg="Update bootcamp")


@router.delete(
    "/{bootcamp_id}",
    response_model=BootcampMessageResponse,
    summary="Delete bootcamp",
)
async def delete_bootcamp(bootcamp_id: str) -> BootcampMessageResponse:
    logger.debug("Delete bootcamp %s", bootcamp_id)
    return BootcampMessageResponse(msg="delete bootcamp")
