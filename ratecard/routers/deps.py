from fastapi import Request

from ratecard.services.board import BoardController
from ratecard.services.rates.providers import RateSourceSelector


def get_selector(request: Request) -> RateSourceSelector:
    return request.app.state.rate_selector


def get_board(request: Request) -> BoardController:
    return request.app.state.board
