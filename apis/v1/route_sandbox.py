from fastapi import APIRouter, Depends, HTTPException, Request, status

from core.config import settings
from core.errors import MissingFieldError, ValidationError
from sandbox.orchestrator import Sandbox
from sandbox.registry import list_languages, lookup
from schemas.code import CodeRequest, ExecutionResult, LanguageInfo

router = APIRouter()


def get_sandbox(request: Request) -> Sandbox:
    return request.app.state.sandbox


def validate_code_request(code_request: CodeRequest) -> None:
    """
    Reject a request before anything is written or spawned.
    """
    if code_request.code is None or not code_request.language:
        raise MissingFieldError()
    lookup(code_request.language)


@router.post("/execute", response_model=ExecutionResult)
async def execute_code(
    code_request: CodeRequest, sandbox: Sandbox = Depends(get_sandbox)
) -> ExecutionResult:
    try:
        validate_code_request(code_request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if len(code_request.code.encode("utf-8", errors="surrogatepass")) > settings.MAX_SOURCE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Code must not exceed {settings.MAX_SOURCE_BYTES} bytes",
        )

    return await sandbox.execute(code_request.code, code_request.language)


@router.get("/languages", response_model=list[LanguageInfo])
async def get_languages() -> list[LanguageInfo]:
    return [
        LanguageInfo(
            name=config.name,
            display_name=config.display_name,
            extension=config.source_extension,
            template=config.template,
        )
        for config in list_languages()
    ]
