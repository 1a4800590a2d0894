from fastapi import Request


def get_repo(request: Request):
    return request.app.state.repo


def get_identity_provider(request: Request):
    return request.app.state.identity


def get_payment_bridge(request: Request):
    return request.app.state.payments
