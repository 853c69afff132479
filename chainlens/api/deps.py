from fastapi import Request

from ..core.responder import ChatResponder
from ..core.supervisor import AIConnectionSupervisor
from ..providers.tatum import TatumProvider


def get_supervisor(request: Request) -> AIConnectionSupervisor:
    return request.app.state.supervisor


def get_responder(request: Request) -> ChatResponder:
    return request.app.state.responder


def get_data_provider(request: Request) -> TatumProvider:
    return request.app.state.data_provider
