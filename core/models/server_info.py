"""Server discovery model."""

from pydantic import BaseModel


class ServerInfo(BaseModel):
    """Contents of server.json, advertising the running status API."""

    port: int
    pid: int
    startedAt: str
    url: str
    version: str
