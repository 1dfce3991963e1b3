"""Tests for same-chain swap adapters against mocked upstream APIs."""

import json

import httpx
import pytest

from swapbridge.routing.base import AdapterQuoteParams
from swapbridge.routing.canton import CantonSwapAdapter
from swapbridge.routing.cetus import CetusSwapAdapter
from swapbridge.routing.jupiter import JupiterAdapter
from swapbridge.routing.oneinch import OneInchAdapter
from swapbridge.routing.paraswap import ParaSwapAdapter

USDC_ETH = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT_ETH = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
SENDER = "0x1111111111111111111111111111111111111111"


def evm_params(**overrides) -> AdapterQuoteParams:
    values = dict(
        chain_id="1",
        from_token_address=USDC_ETH,
        to_token_address=USDT_ETH,
        amount="1000",
        slippage_bps=50,
    )
    values.update(overrides)
    return AdapterQuoteParams(**values)


def failing_transport(status_code: int = 500, text: str = "boom") -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status_code, text=text))


def raising_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    return httpx.MockTransport(handler)


class TestParaSwapAdapter:
    """Tests for ParaSwapAdapter."""

    @staticmethod
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/prices":
            return httpx.Response(200, json={
                "priceRoute": {
                    "srcAmount": "1000",
                    "destAmount": "2000",
                    "gasCost": "120000",
                    "gasCostUSD": "3.5",
                },
            })
        if request.url.path == "/transactions/1":
            return httpx.Response(200, json={
                "to": "0xaugustus",
                "data": "0xswapdata",
                "value": "0",
                "gas": "210000",
            })
        return httpx.Response(404)

    @pytest.mark.asyncio
    async def test_quote_without_sender(self):
        adapter = ParaSwapAdapter(transport=httpx.MockTransport(self.handler))
        result = await adapter.get_quote(evm_params())

        assert result.success is True
        assert result.to_amount == "2000"
        assert result.to_amount_min == "2000"
        assert result.exchange_rate == "2"
        assert result.estimated_gas == "120000"
        assert result.fees[0].name == "Gas cost"
        assert result.fees[0].amount_usd == 3.5
        assert result.transaction_data is None

    @pytest.mark.asyncio
    async def test_quote_with_sender_builds_transaction(self):
        adapter = ParaSwapAdapter(transport=httpx.MockTransport(self.handler))
        result = await adapter.get_quote(evm_params(sender_address=SENDER))

        assert result.transaction_data.to == "0xaugustus"
        assert result.transaction_data.data == "0xswapdata"
        assert result.transaction_data.gas_limit == "210000"

    @pytest.mark.asyncio
    async def test_price_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return self.handler(request)

        adapter = ParaSwapAdapter(transport=httpx.MockTransport(handler))
        await adapter.get_quote(evm_params(chain_id="137"))

        query = seen[0].url.params
        assert query["network"] == "137"
        assert query["srcToken"] == USDC_ETH
        assert query["side"] == "SELL"

    @pytest.mark.asyncio
    async def test_no_price_route(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        adapter = ParaSwapAdapter(transport=transport)

        result = await adapter.get_quote(evm_params())

        assert result.success is False
        assert result.error == "No swap route found for this token pair."

    @pytest.mark.asyncio
    async def test_http_error(self):
        adapter = ParaSwapAdapter(transport=failing_transport(400, "bad token"))
        result = await adapter.get_quote(evm_params())

        assert result.success is False
        assert result.error == "ParaSwap price error (400): bad token"

    @pytest.mark.asyncio
    async def test_network_error(self):
        adapter = ParaSwapAdapter(transport=raising_transport())
        result = await adapter.get_quote(evm_params())

        assert result.success is False
        assert result.error.startswith("ParaSwap adapter error:")


class TestOneInchAdapter:
    """Tests for OneInchAdapter."""

    @pytest.mark.asyncio
    async def test_requires_api_key(self):
        adapter = OneInchAdapter(api_key=None)
        result = await adapter.get_quote(evm_params())

        assert result.success is False
        assert "ONEINCH_API_KEY" in result.error

    @pytest.mark.asyncio
    async def test_quote_endpoint(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"dstAmount": "500", "gas": 180000})

        adapter = OneInchAdapter(api_key="test-key", transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(evm_params())

        assert result.success is True
        assert result.to_amount == "500"
        assert result.exchange_rate == "0.5"
        assert result.estimated_gas == "180000"
        assert seen[0].url.path.endswith("/1/quote")
        assert seen[0].headers["Authorization"] == "Bearer test-key"
        assert seen[0].url.params["slippage"] == "0.5"

    @pytest.mark.asyncio
    async def test_swap_endpoint_with_sender(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "dstAmount": "500",
                "tx": {"to": "0xrouter", "data": "0xcalldata", "value": "0", "gas": 250000},
            })

        adapter = OneInchAdapter(api_key="test-key", transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(evm_params(sender_address=SENDER))

        assert seen[0].url.path.endswith("/1/swap")
        assert seen[0].url.params["from"] == SENDER
        assert result.transaction_data.to == "0xrouter"
        assert result.transaction_data.gas_limit == "250000"

    @pytest.mark.asyncio
    async def test_http_error(self):
        adapter = OneInchAdapter(api_key="k", transport=failing_transport(401, "unauthorized"))
        result = await adapter.get_quote(evm_params())

        assert result.error == "1inch API error (401): unauthorized"


class TestJupiterAdapter:
    """Tests for JupiterAdapter."""

    SOL = "So11111111111111111111111111111111111111112"
    USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

    def params(self, **overrides) -> AdapterQuoteParams:
        return evm_params(
            chain_id="solana",
            from_token_address=self.SOL,
            to_token_address=self.USDC,
            amount="1000000000",
            **overrides,
        )

    @staticmethod
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/quote":
            return httpx.Response(200, json={
                "inAmount": "1000000000",
                "outAmount": "150000000",
                "otherAmountThreshold": "149250000",
                "priceImpactPct": "0.001",
            })
        if request.url.path == "/swap":
            body = json.loads(request.content)
            assert body["userPublicKey"] == "SoLSender111"
            return httpx.Response(200, json={"swapTransaction": "base64-tx"})
        return httpx.Response(404)

    @pytest.mark.asyncio
    async def test_quote(self):
        adapter = JupiterAdapter(transport=httpx.MockTransport(self.handler))
        result = await adapter.get_quote(self.params())

        assert result.success is True
        assert result.to_amount == "150000000"
        assert result.to_amount_min == "149250000"
        assert result.exchange_rate == "0.15"
        assert result.price_impact == 0.001
        assert result.transaction_data is None

    @pytest.mark.asyncio
    async def test_serialized_transaction_with_sender(self):
        adapter = JupiterAdapter(transport=httpx.MockTransport(self.handler))
        result = await adapter.get_quote(self.params(sender_address="SoLSender111"))

        assert result.transaction_data.serialized_transaction == "base64-tx"

    @pytest.mark.asyncio
    async def test_swap_build_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/swap":
                return httpx.Response(500, text="swap down")
            return self.handler(request)

        adapter = JupiterAdapter(transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(self.params(sender_address="SoLSender111"))

        assert result.success is False
        assert result.error == "Jupiter swap error (500): swap down"

    @pytest.mark.asyncio
    async def test_quote_error(self):
        adapter = JupiterAdapter(transport=failing_transport(400, "no route"))
        result = await adapter.get_quote(self.params())

        assert result.error == "Jupiter quote error (400): no route"


class TestCetusSwapAdapter:
    """Tests for CetusSwapAdapter and its Aftermath fallback."""

    def params(self, **overrides) -> AdapterQuoteParams:
        return evm_params(
            chain_id="sui",
            from_token_address="0x2::sui::SUI",
            to_token_address="0xdba3::usdc::USDC",
            amount="1000",
            **overrides,
        )

    @pytest.mark.asyncio
    async def test_cetus_quote(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.host == "api-sui.cetus.zone"
            return httpx.Response(200, json={
                "code": 200,
                "msg": "Success",
                "data": {"amount_out": "2500", "deviation_ratio": "0.002"},
            })

        adapter = CetusSwapAdapter(transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(self.params())

        assert result.success is True
        assert result.to_amount == "2500"
        assert result.to_amount_min == "2487"
        assert result.exchange_rate == "2.5"
        assert result.price_impact == pytest.approx(0.2)

    @pytest.mark.asyncio
    async def test_falls_back_to_aftermath(self):
        hosts = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            if request.url.host == "api-sui.cetus.zone":
                return httpx.Response(200, json={"code": 4001, "msg": "no route"})
            if request.url.path == "/api/trade/route":
                return httpx.Response(200, json={"coinOut": {"amount": "2400"}, "priceImpact": 0.3})
            if request.url.path == "/api/trade/transaction":
                return httpx.Response(200, json={"tx": "sui-tx-bytes"})
            return httpx.Response(404)

        adapter = CetusSwapAdapter(transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(self.params(sender_address="0xsuisender"))

        assert hosts[0] == "api-sui.cetus.zone"
        assert "aftermath.finance" in hosts
        assert result.success is True
        assert result.to_amount == "2400"
        assert result.price_impact == 0.3
        assert result.transaction_data.serialized_transaction == "sui-tx-bytes"

    @pytest.mark.asyncio
    async def test_both_fail(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api-sui.cetus.zone":
                return httpx.Response(200, json={"code": 200, "data": {}})
            return httpx.Response(200, json={"coinOut": {}})

        adapter = CetusSwapAdapter(transport=httpx.MockTransport(handler))
        result = await adapter.get_quote(self.params())

        assert result.success is False
        assert result.error == "Aftermath returned no output amount"


class TestCantonSwapAdapter:
    """Tests for CantonSwapAdapter."""

    def params(self, from_token="canton:native", to_token="canton:usdc", amount="100"):
        return AdapterQuoteParams(
            chain_id="canton",
            from_token_address=from_token,
            to_token_address=to_token,
            amount=amount,
            slippage_bps=50,
        )

    @staticmethod
    def price_transport(calls: list, price: float = 0.2) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"canton-network": {"usd": price}})

        return httpx.MockTransport(handler)

    @pytest.mark.asyncio
    async def test_cc_to_usdc(self):
        calls = []
        adapter = CantonSwapAdapter(transport=self.price_transport(calls))
        result = await adapter.get_quote(self.params())

        assert result.success is True
        # 100 CC * 0.2 USD * (1 - 0.3%) = 19.94 USDCx
        assert result.to_amount == "19940000"
        assert result.to_amount_min == "19840300"
        assert result.exchange_rate == "0.20000000"
        assert result.estimated_gas == "0"
        assert result.price_impact == 0.05
        assert result.fees[0].name == "Canton Network fee (0.3%)"
        assert result.fees[0].token == "CC"
        assert result.fees[0].amount_usd == pytest.approx(0.06)

    @pytest.mark.asyncio
    async def test_intent_is_serialized(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params())

        intent = json.loads(result.transaction_data.serialized_transaction)
        assert intent["type"] == "canton:transfer"
        assert intent["fromToken"] == "canton:native"
        assert intent["fromAmount"] == "1000000000000"
        assert intent["toAmountMin"] == "19840300"

    @pytest.mark.asyncio
    async def test_stablecoins_are_one_to_one(self):
        calls = []
        adapter = CantonSwapAdapter(transport=self.price_transport(calls))
        result = await adapter.get_quote(self.params("canton:usdc", "canton:usdt", "10"))

        assert result.to_amount == "9970000"
        assert result.fees[0].token == "USDC"
        assert calls == []

    @pytest.mark.asyncio
    async def test_usdc_to_cc(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([], price=0.25))
        result = await adapter.get_quote(self.params("canton:usdc", "canton:native", "10"))

        # 10 USDCx / 0.25 * 0.997 = 39.88 CC
        assert result.to_amount == "398800000000"

    @pytest.mark.asyncio
    async def test_price_is_cached(self):
        calls = []
        adapter = CantonSwapAdapter(transport=self.price_transport(calls))

        await adapter.get_quote(self.params())
        await adapter.get_quote(self.params(amount="50"))

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_fallback_price_when_unreachable(self):
        adapter = CantonSwapAdapter(fallback_price_usd=0.166, transport=failing_transport())
        price = await adapter.get_cc_price_usd()

        assert str(price) == "0.166"

    @pytest.mark.asyncio
    async def test_large_trade_price_impact(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params(amount="200000"))

        assert result.price_impact == 0.5

    @pytest.mark.asyncio
    async def test_rejects_non_canton_tokens(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params(from_token=USDC_ETH))

        assert result.error == "Canton swap adapter only handles canton: token addresses"

    @pytest.mark.asyncio
    async def test_rejects_same_token(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params("canton:usdc", "canton:usdc"))

        assert result.error == "Cannot swap a token for itself"

    @pytest.mark.asyncio
    async def test_rejects_bad_amount(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params(amount="-5"))

        assert result.error == "Invalid amount"

    @pytest.mark.asyncio
    async def test_unknown_pair(self):
        adapter = CantonSwapAdapter(transport=self.price_transport([]))
        result = await adapter.get_quote(self.params("canton:native", "canton:other"))

        assert result.error == "No Canton swap route for canton:native -> canton:other"
