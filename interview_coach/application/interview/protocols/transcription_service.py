from typing import Protocol


class TranscriptionServiceProtocol(Protocol):
    async def transcribe(self, content: bytes, filename: str, content_type: str) -> str:
        """
        Convert recorded speech to text.

        Raises:
            TranscriptionFailedError: If the provider rejects the request
        """
        ...
