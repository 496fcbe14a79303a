"""Base adapter interface for platform specific implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..router import Response


class Adapter(ABC):
    """Abstract adapter for chat platforms."""

    @abstractmethod
    async def send_response(self, response: Response) -> None:
        """Send ``response.text`` and its keyboard to ``response.chat_id``."""

    @abstractmethod
    async def acknowledge(self, selection_id: str) -> None:
        """Clear the pending indicator of the button press ``selection_id``."""

    async def deliver(self, response: Response) -> None:
        """Send ``response`` and acknowledge its selection, if any.

        The acknowledgement happens even when sending fails; the send error
        is still raised to the caller.
        """
        try:
            await self.send_response(response)
        finally:
            if response.acknowledge_selection_id is not None:
                await self.acknowledge(response.acknowledge_selection_id)
