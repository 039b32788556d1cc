"""
Asset index resolution.

A resolver is any callable mapping a coin symbol to its venue asset index,
or None when the symbol is unknown. MetaAssetResolver builds one from the
exchange metadata (perp universe order + spot offset).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, Optional

from hyperliquid_signing.core.errors import UnknownAssetError

logger = logging.getLogger(__name__)

AssetResolver = Callable[[str], Optional[int]]

SPOT_ASSET_OFFSET = 10_000


class MetaAssetResolver:
    """
    Resolves coins from Hyperliquid metadata.

    Perp assets are indexed by their position in meta["universe"]; spot
    pairs by SPOT_ASSET_OFFSET + their spot index.
    """

    def __init__(self, meta: Dict, spot_meta: Optional[Dict] = None):
        self.asset_map: Dict[str, int] = {
            u["name"]: i for i, u in enumerate(meta.get("universe", []))
        }
        if spot_meta:
            for spot_info in spot_meta.get("universe", []):
                self.asset_map[spot_info["name"]] = SPOT_ASSET_OFFSET + spot_info["index"]
        logger.debug("[MetaAssetResolver] Loaded %d assets", len(self.asset_map))

    @classmethod
    def from_info(cls, info, include_spot: bool = True) -> "MetaAssetResolver":
        """
        Build from a hyperliquid.info.Info client.

        Args:
            info: Info instance (skip_ws=True is enough)
            include_spot: Also fetch spot metadata
        """
        meta = info.meta()
        spot_meta = info.spot_meta() if include_spot else None
        return cls(meta, spot_meta)

    def __call__(self, coin: str) -> Optional[int]:
        return self.asset_map.get(coin)


def resolve_asset(coin: str, resolver: AssetResolver) -> int:
    """Resolve one coin or raise UnknownAssetError."""
    asset = resolver(coin)
    if asset is None:
        raise UnknownAssetError(coin)
    return asset


def resolve_assets(coins: Iterable[str], resolver: AssetResolver, max_workers: int = 8) -> Dict[str, int]:
    """
    Resolve every distinct coin once.

    Distinct coins are looked up concurrently when there is more than one;
    the call returns only after all lookups finish. Asset index 0 is a valid
    result, only None counts as unresolved.

    Returns:
        Dict coin -> asset index, memoized for the batch
    """
    distinct = list(dict.fromkeys(coins))
    if len(distinct) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(distinct))) as pool:
            results = list(pool.map(resolver, distinct))
    else:
        results = [resolver(coin) for coin in distinct]

    cache: Dict[str, int] = {}
    for coin, asset in zip(distinct, results):
        if asset is None:
            raise UnknownAssetError(coin)
        cache[coin] = asset
    return cache
