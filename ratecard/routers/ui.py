from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ratecard.core.errors import UnsupportedCurrencyError
from ratecard.models.constants import CURRENCIES
from ratecard.services.board import BoardController
from .deps import get_board

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

LAST_UPDATED_FORMAT = "%Y/%m/%d %H:%M:%S"


def _board_context(board: BoardController) -> dict:
    state = board.state
    last_updated = state.last_updated
    return {
        "currencies": CURRENCIES,
        "base_currency": state.base_currency,
        "selected_date": state.selected_date.isoformat(),
        "max_date": board.today().isoformat(),
        "loading": state.loading,
        "error": state.error,
        "has_rates": state.rates is not None,
        "last_updated": last_updated.strftime(LAST_UPDATED_FORMAT) if last_updated else None,
        "cards": board.quote_cards(),
    }


def _back_to_board() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def ui_board(request: Request, board: BoardController = Depends(get_board)):
    """Rate board page. The first visit performs the initial load."""
    if not board.has_loaded:
        await board.refresh()
    settings = request.app.state.settings
    context = {"app_name": settings.app_name, "version": settings.version}
    context.update(_board_context(board))
    return templates.TemplateResponse(request, "board.html", context)


@router.post("/base", response_class=RedirectResponse)
async def ui_select_base(
    base_currency: str = Form(...),
    board: BoardController = Depends(get_board),
):
    try:
        await board.select_base(base_currency)
    except UnsupportedCurrencyError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _back_to_board()


@router.post("/date", response_class=RedirectResponse)
async def ui_select_date(
    selected_date: date = Form(...),
    board: BoardController = Depends(get_board),
):
    # A future date is silently refused; the page keeps the previous day
    await board.select_date(selected_date)
    return _back_to_board()


@router.post("/refresh", response_class=RedirectResponse)
async def ui_refresh(board: BoardController = Depends(get_board)):
    await board.refresh()
    return _back_to_board()
