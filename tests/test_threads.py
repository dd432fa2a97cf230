"""Tests for worker dispatch and fault collection."""

import threading

import pytest

from gridfill import threads
from gridfill.errors import InvalidArgumentError, WorkerFaultError
from gridfill.threads import dispatch, resolve_num_threads, run_workers, split_range


class TestResolveNumThreads:
    """Test translation of user thread counts."""

    def test_zero_uses_hardware_concurrency(self):
        assert resolve_num_threads(0, _cpu_count=lambda: 6) == 6

    def test_zero_looks_up_hardware_concurrency(self, monkeypatch):
        monkeypatch.setattr(threads, "hardware_concurrency", lambda: 3)
        assert resolve_num_threads(0) == 3

    def test_explicit_count_is_kept(self):
        assert resolve_num_threads(1, _cpu_count=lambda: 6) == 1
        assert resolve_num_threads(4, _cpu_count=lambda: 6) == 4

    def test_negative_count_rejected(self):
        with pytest.raises(InvalidArgumentError):
            resolve_num_threads(-1)

    def test_hardware_concurrency_is_positive(self):
        assert threads.hardware_concurrency() >= 1


class TestSplitRange:
    """Test band partitioning."""

    def test_last_band_takes_remainder(self):
        assert split_range(10, 3) == [(0, 3), (3, 6), (6, 10)]

    def test_single_band(self):
        assert split_range(7, 1) == [(0, 7)]

    def test_never_more_bands_than_items(self):
        assert split_range(2, 8) == [(0, 1), (1, 2)]

    def test_empty_range(self):
        assert split_range(0, 4) == []

    @pytest.mark.parametrize("size,workers", [(5, 2), (16, 4), (17, 5), (3, 3)])
    def test_bands_cover_range(self, size, workers):
        bands = split_range(size, workers)
        assert bands[0][0] == 0
        assert bands[-1][1] == size
        for (_, end), (start, _) in zip(bands, bands[1:]):
            assert end == start


class TestRunWorkers:
    """Test parallel execution and fault propagation."""

    def test_results_in_task_order(self):
        results = run_workers([lambda i=i: i * i for i in range(5)])
        assert results == [0, 1, 4, 9, 16]

    def test_single_task_runs_inline(self):
        caller = threading.get_ident()
        assert run_workers([threading.get_ident]) == [caller]

    def test_no_tasks(self):
        assert run_workers([]) == []

    def test_all_faults_collected_last_one_chained(self):
        finished = []

        def ok():
            finished.append(True)
            return 1

        def fail(message):
            raise RuntimeError(message)

        with pytest.raises(WorkerFaultError) as excinfo:
            run_workers([lambda: fail("first"), ok, lambda: fail("last"), ok])

        error = excinfo.value
        assert [str(fault) for fault in error.faults] == ["first", "last"]
        assert error.__cause__ is error.faults[-1]
        assert len(finished) == 2

    def test_single_task_fault_is_wrapped(self):
        def fail():
            raise KeyError("boom")

        with pytest.raises(WorkerFaultError) as excinfo:
            run_workers([fail])
        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_faults_are_logged(self, caplog):
        def fail():
            raise ValueError("logged")

        with pytest.raises(WorkerFaultError):
            run_workers([fail, fail])
        errors = [record for record in caplog.records if record.levelname == "ERROR"]
        assert len(errors) == 2


class TestDispatch:
    """Test band dispatch of range workers."""

    def test_worker_sees_every_band(self):
        seen = []
        lock = threading.Lock()

        def worker(start, end):
            with lock:
                seen.append((start, end))
            return end - start

        results = dispatch(worker, 10, 4)
        assert sorted(seen) == split_range(10, 4)
        assert sum(results) == 10
