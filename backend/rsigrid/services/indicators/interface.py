"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from rsigrid.services.base import BaseService
from rsigrid.schemas.market import Candle
from rsigrid.schemas.indicators import SymbolSnapshot


class IndicatorServiceInterface(
    BaseService[dict[str, Sequence[Candle]], dict[str, SymbolSnapshot]]
):
    """
    Indicator Engine Service Contract.

    INPUT: dict[str, Sequence[Candle]]
        - Key: symbol name
        - Value: candle batch for that symbol, oldest first

    OUTPUT: dict[str, SymbolSnapshot]
        - Key: symbol name
        - Value: RSI / SMA-of-RSI series plus latest price and volume
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(
        self, input_data: dict[str, Sequence[Candle]]
    ) -> dict[str, SymbolSnapshot]:
        """Calculate snapshots for every symbol in the batch."""
        pass

    @abstractmethod
    async def calculate_for_symbol(
        self,
        candles: Sequence[Candle],
        rsi_period: Optional[int] = None,
        sma_period: Optional[int] = None,
        display_limit: Optional[int] = None,
    ) -> SymbolSnapshot:
        """
        Calculate the snapshot for a single symbol.

        Args:
            candles: Candle batch, oldest first
            rsi_period: RSI lookback (service default when omitted)
            sma_period: SMA window over the RSI series
            display_limit: Max points kept per series

        Returns:
            SymbolSnapshot (empty series when history is too short)
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
