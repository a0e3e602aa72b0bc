"""Rarity/pool pairing and mint matching tests."""

from nftstake.reconcile import index_pools_by_rarity, match_assets, reconcile_all
from nftstake.state import Located, PoolAddresses, PoolInfo, RarityInfo


def _rarity(key, n, mints=()):
    return RarityInfo(key(1), f"C{n}", "Gold", Located(key(n)), list(mints))


def _pool(key, rarity_n, pool_n, staked=0):
    return PoolInfo(
        key(1), key(2), key(rarity_n), staked, PoolAddresses(key(pool_n), key(pool_n + 1), key(pool_n + 2))
    )


class TestReconcileAll:
    def test_one_to_one(self, key):
        rarity = _rarity(key, 10)
        pool = _pool(key, 10, 100)
        pairs = reconcile_all([rarity], [pool])
        assert len(pairs) == 1
        assert pairs[0].rarity_info is rarity
        assert pairs[0].pool_info is pool

    def test_duplicate_pools_first_wins(self, key):
        rarity = _rarity(key, 10)
        first = _pool(key, 10, 100)
        second = _pool(key, 10, 110)
        pairs = reconcile_all([rarity], [first, second])
        assert len(pairs) == 1
        assert pairs[0].pool_info is first

        pairs = reconcile_all([rarity], [second, first])
        assert pairs[0].pool_info is second

    def test_unmatched_rarity_dropped(self, key):
        linked = _rarity(key, 10)
        orphan = _rarity(key, 11)
        pairs = reconcile_all([orphan, linked], [_pool(key, 10, 100)])
        assert [p.rarity_info for p in pairs] == [linked]

    def test_keeps_rarity_order(self, key):
        rarities = [_rarity(key, n) for n in (12, 10, 11)]
        pools = [_pool(key, n, 100 + 3 * i) for i, n in enumerate((10, 11, 12))]
        pairs = reconcile_all(rarities, pools)
        assert [p.rarity_info.collection for p in pairs] == ["C12", "C10", "C11"]
        assert all(p.pool_info.rarity_info == p.rarity_info.key for p in pairs)

    def test_orphan_pools_ignored(self, key):
        assert reconcile_all([], [_pool(key, 10, 100)]) == []

    def test_index_policy(self, key):
        first = _pool(key, 10, 100)
        index = index_pools_by_rarity([first, _pool(key, 10, 110), _pool(key, 11, 120)])
        assert index[key(10)] is first
        assert set(index) == {key(10), key(11)}


class TestMatchAssets:
    def test_first_pair_wins(self, key):
        a = reconcile_all([_rarity(key, 10, [key(50), key(51)])], [_pool(key, 10, 100)])
        b = reconcile_all([_rarity(key, 11, [key(51), key(52)])], [_pool(key, 11, 110)])
        pairs = a + b
        matches = match_assets(pairs, [key(52), key(51), key(50)])
        assert [(m.mint, m.index) for m in matches] == [(key(52), 1), (key(51), 0), (key(50), 0)]
        assert matches[0].pair is pairs[1]

    def test_unmanaged_mints_skipped(self, key):
        pairs = reconcile_all([_rarity(key, 10, [key(50)])], [_pool(key, 10, 100)])
        matches = match_assets(pairs, [key(99), key(50), key(98)])
        assert [m.mint for m in matches] == [key(50)]

    def test_no_pairs(self, key):
        assert match_assets([], [key(50)]) == []
