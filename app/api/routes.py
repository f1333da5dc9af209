from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from requests import RequestException

from app.errors import InvalidSignatureError
from app.schemas.interaction import parse_interaction
from app.services.signing import verify_request_signature

router = APIRouter()


@router.get('/metadata')
def get_metadata(request: Request):
    action = request.app.state.token_price_action
    return action.get_metadata().model_dump(exclude_none=True)


@router.post('/interactions')
async def handle_interaction(request: Request):
    body = await request.body()

    public_key = request.app.state.get_settings().COLLABLAND_ACTION_PUBLIC_KEY
    if public_key:
        try:
            verify_request_signature(public_key, request.headers, body)
        except InvalidSignatureError as exc:
            print(f"[ACTION][signature_rejected] reason={exc}", flush=True)
            raise HTTPException(status_code=401, detail='INVALID_SIGNATURE') from exc

    try:
        interaction = parse_interaction(body)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail='UNSUPPORTED_INTERACTION') from exc

    action = request.app.state.token_price_action
    try:
        response = await run_in_threadpool(action.handle, interaction)
    except RequestException as exc:
        print(
            f"[QUOTE][fetch_error] interaction={interaction.id} error={exc!r}",
            flush=True,
        )
        raise HTTPException(status_code=502, detail='UPSTREAM_FETCH_FAILED') from exc

    if response is None:
        return Response(status_code=204)
    return response.to_payload()
