import json
from typing import Optional


def make_request(chalice_gateway, endpoint: str = '/', method: str = 'GET',
                 query: Optional[str] = None, json_body=None, token=None) -> dict:
    """Request through the local gateway, token is the demo actor id"""
    headers = {'Content-Type': 'application/json', 'Host': 'localhost'}
    if token:
        headers['Authorization'] = token
    return chalice_gateway.handle_request(
        method=method,
        path=f"{endpoint}?{query}" if query else f"{endpoint}",
        headers=headers,
        body=json.dumps(json_body) if json_body is not None else b''
    )


def response_body(response: dict):
    return json.loads(response['body'])
