"""
Payload Router

Turns trading requests into signed, transport-ready payloads:
build action -> pick signing domain -> sign -> wrap with nonce/vault.
Posting the payload (HTTP, retries, rate limits) is the caller's job.

Public request methods return a SigningReport instead of raising, so callers
branch on report.error_kind rather than catching exceptions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Union

from hyperliquid_signing.core.config import Config
from hyperliquid_signing.core.errors import SigningError
from hyperliquid_signing.execution import actions
from hyperliquid_signing.execution.assets import AssetResolver
from hyperliquid_signing.execution.orders import (
    BuilderInfo,
    CancelByCloidRequest,
    CancelRequest,
    Cloid,
    Grouping,
    ModifyRequest,
    OrderLike,
    SigningReport,
    TriggerOrderType,
)
from hyperliquid_signing.signing.signer import Signature, TypedDataSigner, sign
from hyperliquid_signing.signing.typed_data import SigningMode, build_typed_data, signing_mode_for
from hyperliquid_signing.utils.nonce import get_timestamp_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedPayload:
    """Action plus everything the venue needs to verify it."""

    action: Dict[str, Any]
    nonce: int
    signature: Signature
    vault_address: Optional[str] = None

    def to_request(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "nonce": self.nonce,
            "signature": self.signature.to_dict(),
            "vaultAddress": self.vault_address,
        }


class PayloadRouter:
    """
    Signing flow for every action kind.

    1. Resolve coins and build the canonical action
    2. L1 actions: hash with nonce/vault, wrap in a phantom agent
       User-signed actions: type the action's own fields
    3. Sign with the configured TypedDataSigner
    4. Return SignedPayload inside a SigningReport
    """

    def __init__(self, config: Config, signer: TypedDataSigner, resolver: AssetResolver):
        """
        Args:
            config: Network config (mainnet flag, default vault address)
            signer: Key-holding signer
            resolver: coin -> asset index
        """
        self.config = config
        self.signer = signer
        self.resolver = resolver

    @property
    def is_mainnet(self) -> bool:
        return self.config.is_mainnet

    def sign_action(
        self,
        action: Dict[str, Any],
        vault_address: Optional[str] = None,
        nonce: Optional[int] = None,
    ) -> SignedPayload:
        """
        Sign an already-built action. Raises SigningError/ValueError.

        Args:
            action: Action dict
            vault_address: L1 only
            nonce: L1 only; defaults to the current millisecond timestamp
        """
        mode = signing_mode_for(action)
        if mode is SigningMode.USER_SIGNED:
            nonce = actions.user_signed_nonce(action)
            vault_address = None
            typed_data = build_typed_data(action, mode, is_mainnet=self.is_mainnet)
            # The venue verifies against the chain stamped at signing time
            action = dict(typed_data.message)
        else:
            if nonce is None:
                nonce = get_timestamp_ms()
            typed_data = build_typed_data(
                action, mode, is_mainnet=self.is_mainnet, nonce=nonce, vault_address=vault_address
            )

        signature = sign(self.signer, typed_data)
        logger.info("[PayloadRouter] Signed %s action (nonce=%d, vault=%s)", action["type"], nonce, vault_address)
        return SignedPayload(action=action, nonce=nonce, signature=signature, vault_address=vault_address)

    # ------------------------
    # Requests
    # ------------------------

    def order(
        self,
        orders: Sequence[OrderLike],
        grouping: Grouping = "na",
        builder: Optional[Union[BuilderInfo, Dict[str, Any]]] = None,
        vault_address: Optional[str] = None,
    ) -> SigningReport:
        return self._report(
            lambda: actions.build_order_action(orders, self.resolver, grouping, builder),
            vault_address=self._vault(vault_address),
        )

    def market_open(
        self,
        coin: str,
        is_buy: bool,
        sz: float,
        px: float,
        slippage: float = actions.DEFAULT_SLIPPAGE,
        triggers: Optional[Sequence[TriggerOrderType]] = None,
        cloid: Optional[Cloid] = None,
        is_spot: bool = False,
    ) -> SigningReport:
        """Market-style open at reference price px with optional TP/SL legs."""
        def build():
            orders, grouping = actions.market_open_orders(coin, is_buy, sz, px, slippage, triggers, is_spot, cloid)
            return actions.build_order_action(orders, self.resolver, grouping)

        return self._report(build, vault_address=self._vault(None))

    def cancel(self, cancels: Sequence[CancelRequest], vault_address: Optional[str] = None) -> SigningReport:
        return self._report(lambda: actions.cancel_action(cancels, self.resolver), vault_address=self._vault(vault_address))

    def cancel_by_cloid(self, cancels: Sequence[CancelByCloidRequest], vault_address: Optional[str] = None) -> SigningReport:
        return self._report(
            lambda: actions.cancel_by_cloid_action(cancels, self.resolver), vault_address=self._vault(vault_address)
        )

    def modify(self, oid: Union[int, Cloid], order: OrderLike, vault_address: Optional[str] = None) -> SigningReport:
        return self._report(
            lambda: actions.modify_action(oid, order, self.resolver), vault_address=self._vault(vault_address)
        )

    def batch_modify(self, modifies: Sequence[ModifyRequest], vault_address: Optional[str] = None) -> SigningReport:
        return self._report(
            lambda: actions.batch_modify_action(modifies, self.resolver), vault_address=self._vault(vault_address)
        )

    def update_leverage(self, coin: str, leverage: int, is_cross: bool = True) -> SigningReport:
        return self._report(
            lambda: actions.update_leverage_action(coin, leverage, is_cross, self.resolver),
            vault_address=self._vault(None),
        )

    def update_isolated_margin(self, coin: str, is_buy: bool, amount: float) -> SigningReport:
        return self._report(
            lambda: actions.update_isolated_margin_action(coin, is_buy, amount, self.resolver),
            vault_address=self._vault(None),
        )

    def vault_transfer(self, vault_address: str, is_deposit: bool, usd: int) -> SigningReport:
        # The vault is named inside the action; the hash carries no vault suffix.
        return self._report(lambda: actions.vault_transfer_action(vault_address, is_deposit, usd))

    def schedule_cancel(self, time: Optional[int] = None) -> SigningReport:
        return self._report(lambda: actions.schedule_cancel_action(time), vault_address=self._vault(None))

    def set_referrer(self, code: str) -> SigningReport:
        return self._report(lambda: actions.set_referrer_action(code))

    def usd_transfer(self, destination: str, amount: Union[str, float]) -> SigningReport:
        return self._report(lambda: actions.usd_send_action(destination, amount, self.is_mainnet))

    def spot_transfer(self, destination: str, token: str, amount: Union[str, float]) -> SigningReport:
        return self._report(lambda: actions.spot_send_action(destination, token, amount, self.is_mainnet))

    def withdraw(self, destination: str, amount: Union[str, float]) -> SigningReport:
        return self._report(lambda: actions.withdraw_action(destination, amount, self.is_mainnet))

    def usd_class_transfer(self, amount: Union[str, float], to_perp: bool) -> SigningReport:
        return self._report(lambda: actions.usd_class_transfer_action(amount, to_perp, self.is_mainnet))

    def approve_agent(self, agent_address: str, agent_name: str = "") -> SigningReport:
        return self._report(lambda: actions.approve_agent_action(agent_address, self.is_mainnet, agent_name))

    # ------------------------
    # Helpers
    # ------------------------

    def _vault(self, vault_address: Optional[str]) -> Optional[str]:
        return vault_address if vault_address is not None else self.config.hyperliquid.vault_address

    def _report(
        self,
        build_action: Callable[[], Dict[str, Any]],
        vault_address: Optional[str] = None,
    ) -> SigningReport:
        """Run build + sign, mapping failures to a rejected report."""
        try:
            payload = self.sign_action(build_action(), vault_address=vault_address)
        except SigningError as e:
            logger.warning("[PayloadRouter] Rejected (%s): %s", e.kind.value, e)
            return SigningReport(status="rejected", error_kind=e.kind, error_msg=str(e))
        except (ValueError, KeyError, TypeError) as e:
            # malformed caller input; no protocol error kind applies
            logger.warning("[PayloadRouter] Rejected (invalid request): %r", e)
            return SigningReport(status="rejected", error_msg=f"{type(e).__name__}: {e}")
        return SigningReport(status="signed", payload=payload, details={"type": payload.action["type"]})
