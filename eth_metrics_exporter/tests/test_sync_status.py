"""
Tests for sync status normalization and percentage calculation
"""

import pytest

from eth_metrics_exporter.models import HeadSync, SyncProgress
from eth_metrics_exporter.sync_status import (
    ConsensusSyncStatus,
    ExecutionSyncStatus,
    calculate_sync_percentage,
)

LABELS = {"ethereum_role": "execution", "node_name": "geth-1"}


class TestCalculateSyncPercentage:
    """Edge cases of the percentage formula"""

    @pytest.mark.parametrize("block", [0, 1, 17000000])
    def test_nothing_to_sync_is_complete(self, block):
        """highest == starting never divides by zero"""
        assert calculate_sync_percentage(block, block, block) == 100.0
        assert calculate_sync_percentage(0, block, block) == 100.0

    @pytest.mark.parametrize("starting,highest", [(0, 100), (10, 20), (500, 1000000)])
    def test_no_progress_is_zero(self, starting, highest):
        assert calculate_sync_percentage(starting, starting, highest) == 0.0

    def test_halfway(self):
        assert calculate_sync_percentage(50, 0, 100) == 50.0
        assert calculate_sync_percentage(150, 100, 200) == 50.0

    def test_clamped(self):
        assert calculate_sync_percentage(120, 0, 100) == 100.0
        assert calculate_sync_percentage(5, 10, 100) == 0.0
        assert calculate_sync_percentage(150, 100, 0) == 0.0


class TestExecutionSyncStatus:
    """Execution node sync snapshots"""

    def test_no_progress_means_not_syncing(self):
        status = ExecutionSyncStatus.from_progress(None)

        assert status.is_syncing is False
        assert status.current_block == 0
        assert status.highest_block == 0
        assert status.starting_block == 0
        assert status.percent() == 100.0

    def test_progress_is_copied_verbatim(self, syncing_progress):
        status = ExecutionSyncStatus.from_progress(syncing_progress)

        assert status.is_syncing is True
        assert status.current_block == 50
        assert status.highest_block == 100
        assert status.starting_block == 0
        assert status.percent() == 50.0

    def test_observations(self, syncing_progress):
        observations = ExecutionSyncStatus.from_progress(syncing_progress).observations(LABELS)

        values = {o.name: o.value for o in observations}
        assert values == {
            "sync_is_syncing": 1.0,
            "sync_current_block": 50.0,
            "sync_highest_block": 100.0,
            "sync_starting_block": 0.0,
            "sync_percentage": 50.0,
        }
        assert all(o.labels == LABELS for o in observations)

    def test_caught_up_progress_object(self):
        status = ExecutionSyncStatus.from_progress(SyncProgress(current_block=10, highest_block=10, starting_block=10))
        assert status.is_syncing is True
        assert status.percent() == 100.0


class TestConsensusSyncStatus:
    """Beacon node sync snapshots"""

    def test_estimated_highest_slot(self):
        status = ConsensusSyncStatus.from_head_sync(HeadSync(head_slot=750, sync_distance=250, is_syncing=True))

        assert status.estimated_highest_slot == 1000
        assert status.percent() == 75.0

    def test_synced_node(self):
        status = ConsensusSyncStatus.from_head_sync(HeadSync(head_slot=7000100, sync_distance=0, is_syncing=False))
        assert status.percent() == 100.0

    def test_fresh_node(self):
        status = ConsensusSyncStatus(is_syncing=True, head_slot=0, sync_distance=0)
        assert status.percent() == 100.0

    def test_observations(self):
        status = ConsensusSyncStatus(is_syncing=True, head_slot=10, sync_distance=30)
        values = {o.name: o.value for o in status.observations(LABELS)}

        assert values == {
            "sync_is_syncing": 1.0,
            "sync_head_slot": 10.0,
            "sync_estimated_highest_slot": 40.0,
            "sync_distance": 30.0,
            "sync_percentage": 25.0,
        }
