"""Small envelopes shared by several routers."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement for actions with nothing else to return (logout, delete)."""

    message: str
    success: bool = True
