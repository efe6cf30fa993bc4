# barbershop/routers/operations_routes.py

from fastapi import APIRouter, Depends

from barbershop.auth import get_caller_context
from barbershop.context import CallerContext
from barbershop.resolvers import run_operation
from barbershop.schemas import OperationRequest

router = APIRouter(
    tags=["operations"],
)


@router.post("/operations")
async def execute_operation(
    request: OperationRequest,
    ctx: CallerContext = Depends(get_caller_context),
):
    return {"data": await run_operation(request, ctx)}
