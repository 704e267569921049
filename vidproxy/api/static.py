import os

import aiofiles
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response

from vidproxy.config.settings import config

router = APIRouter()


async def read_asset(name: str) -> str:
    path = os.path.join(config.static.directory, name)
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        return await f.read()


@router.get("/", response_class=HTMLResponse)
async def index():
    return HTMLResponse(await read_asset("index.html"))


@router.get("/style.css")
async def stylesheet():
    return Response(await read_asset("style.css"), media_type="text/css")
