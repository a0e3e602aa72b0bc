"""Client tests against an in-memory RPC stand-in."""

from types import SimpleNamespace

import base58  # type: ignore[import-untyped]
import httpx
import pytest
from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]
from solders.hash import Hash  # type: ignore[import-untyped]
from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.signature import Signature  # type: ignore[import-untyped]

from nftstake.client import Client
from nftstake.discriminator import DISCRIMINATOR_RARITY_INFO
from nftstake.errors import NotFoundError
from nftstake.rpc import RateLimitTransport
from nftstake.state import POOL_INFO_SPACE, Located
from nftstake.transaction import update_rarity_info_admin_txn


class FakeRPC:
    def __init__(self, accounts_by_program=None, accounts=None):
        self.accounts_by_program = accounts_by_program or {}
        self.accounts = accounts or {}
        self.program_account_calls = []
        self.sent = []

    def get_program_accounts(self, pubkey, encoding="base64", filters=None):
        self.program_account_calls.append((pubkey, encoding, filters))
        value = [
            SimpleNamespace(pubkey=addr, account=SimpleNamespace(data=data))
            for addr, data in self.accounts_by_program.get(pubkey, [])
        ]
        return SimpleNamespace(value=value)

    def get_account_info(self, pubkey):
        data = self.accounts.get(pubkey)
        value = None if data is None else SimpleNamespace(data=data)
        return SimpleNamespace(value=value)

    def get_latest_blockhash(self):
        return SimpleNamespace(value=SimpleNamespace(blockhash=Hash.default()))

    def send_transaction(self, txn):
        self.sent.append(txn)
        return SimpleNamespace(value=Signature.default())


@pytest.fixture
def chain(key, rarity_program_id, staking_program_id, rarity_account_data, pool_account_data):
    rarity = [
        (key(10), rarity_account_data(key(1), "Apes", "Gold", [key(50), key(51)])),
        (key(11), rarity_account_data(key(1), "Apes", "Silver", [key(52)])),
    ]
    pools = [
        (key(100), pool_account_data(key(1), key(2), key(10), key(101), key(102), 1)),
        (key(110), pool_account_data(key(1), key(2), key(10), key(111), key(112), 9)),
    ]
    return FakeRPC(
        accounts_by_program={rarity_program_id: rarity, staking_program_id: pools},
        accounts=dict(rarity + pools),
    )


@pytest.fixture
def client(chain, rarity_program_id, staking_program_id):
    return Client(chain, rarity_program_id, staking_program_id)


class TestFetch:
    def test_fetch_all(self, client, key):
        pairs = client.fetch_all()
        assert len(pairs) == 1
        pair = pairs[0]
        assert pair.rarity_info.derivation == Located(key(10))
        assert pair.rarity_info.collection == "Apes"
        assert pair.rarity_info.mint_list == [key(50), key(51)]
        assert pair.pool_info.key == key(100)
        assert pair.pool_info.total_staked_amount == 1

    def test_filters_without_admin(self, client, chain, rarity_program_id, staking_program_id):
        client.fetch_all()
        calls = {program: filters for program, _, filters in chain.program_account_calls}
        assert calls[staking_program_id] == [POOL_INFO_SPACE]
        assert calls[rarity_program_id] == [
            MemcmpOpts(offset=0, bytes=base58.b58encode(DISCRIMINATOR_RARITY_INFO).decode())
        ]
        assert all(enc == "base64" for _, enc, _ in chain.program_account_calls)

    def test_filters_with_admin(self, client, chain, key, staking_program_id):
        client.fetch_pool_infos(admin=key(1))
        _, _, filters = chain.program_account_calls[-1]
        assert filters == [POOL_INFO_SPACE, MemcmpOpts(offset=8, bytes=str(key(1)))]

    def test_fetch_single(self, client, key):
        assert client.fetch_rarity_info(key(11)).rarity == "Silver"
        assert client.fetch_pool_info(key(110)).total_staked_amount == 9

    def test_fetch_missing(self, client, key):
        with pytest.raises(NotFoundError):
            client.fetch_pool_info(key(200))


class TestSend:
    def test_send_batches_in_order(self, client, chain, key, rarity_program_id):
        admin = Keypair()
        rarity = client.fetch_rarity_info(key(10))
        rarity.admin = admin.pubkey()
        batch = update_rarity_info_admin_txn(rarity, Keypair().pubkey(), rarity_program_id)

        sigs = client.send_batches([batch, batch], admin)

        assert sigs == [Signature.default(), Signature.default()]
        assert len(chain.sent) == 2
        assert chain.sent[0].message.account_keys[0] == admin.pubkey()


class TestRateLimitTransport:
    def test_retries_on_429(self):
        responses = [httpx.Response(429, headers={"Retry-After": "0"}), httpx.Response(200)]
        delays = []
        transport = RateLimitTransport(
            wrapped=httpx.MockTransport(lambda request: responses.pop(0)),
            sleep=delays.append,
        )
        with httpx.Client(transport=transport) as http:
            assert http.get("http://rpc.test/").status_code == 200
        assert delays == [0.0]

    def test_gives_up(self):
        transport = RateLimitTransport(
            wrapped=httpx.MockTransport(lambda request: httpx.Response(429)),
            max_retries=2,
            backoff=1.0,
            sleep=lambda _: None,
        )
        with httpx.Client(transport=transport) as http:
            assert http.get("http://rpc.test/").status_code == 429
