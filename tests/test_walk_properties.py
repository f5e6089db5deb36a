"""End-to-end walk properties: ordering, early end, failure and isolation.

Each test checks one observable guarantee of a walk against the plain,
unpaused run of the same data.
"""

import pytest

from dazzlewalk import RecordWalker, SequenceWalker, WalkOutcome
from dazzlewalk.testing import EventRecorder, sample_person


def baseline(data, walker_factory=RecordWalker.instance):
    recorder = EventRecorder()
    walker_factory().on_handler(recorder).handle(data)
    return recorder.pairs()


def entry_walker():
    return RecordWalker([
        RecordWalker(fire_entry_event=True),
        SequenceWalker(fire_entry_event=True),
    ])


class TestOrder:

    def test_children_in_adapter_order(self):
        data = {"z": 1, "a": 2, "m": [3, 4]}
        assert baseline(data) == [(".z", 1), (".a", 2), (".m[0]", 3), (".m[1]", 4)]

    def test_container_events_precede_descendants(self):
        paths = [path for path, _ in baseline(sample_person(), entry_walker)]
        for container in (".address", ".hobbies", ".phones", ".phones[0]", ".phones[1]"):
            start = paths.index(container)
            descendants = [i for i, p in enumerate(paths) if p.startswith(container) and p != container]
            assert descendants
            assert all(i > start for i in descendants)

    def test_containers_with_walkers_do_not_fire_by_default(self):
        values = [value for _, value in baseline(sample_person())]
        assert all(not isinstance(v, (dict, list)) for v in values)


class TestEarlyEnd:

    @pytest.mark.parametrize("k", [1, 4, 11])
    def test_end_at_kth_event(self, k):
        recorder = EventRecorder(on_event=lambda e: recorder.count == k and e.end())
        context = RecordWalker.instance().on_handler(recorder).handle(sample_person())

        assert recorder.count == k
        assert context.success
        assert context.outcome is WalkOutcome.SUCCESS
        assert recorder.pairs() == baseline(sample_person())[:k]


class TestSynchronousPauseResume:

    def test_pause_then_resume_inside_handler_changes_nothing(self):
        def pause_and_resume(event):
            event.pause().resume()

        recorder = EventRecorder(on_event=pause_and_resume)
        context = RecordWalker.instance().on_handler(recorder).handle(sample_person())

        assert context.ended
        assert recorder.pairs() == baseline(sample_person())


class TestFailureHalts:

    @pytest.mark.parametrize("k", [1, 5])
    def test_failure_at_kth_event(self, k):
        error = RuntimeError("handler failed")

        def fail_at_k(event):
            if recorder.count == k:
                raise error

        recorder = EventRecorder(on_event=fail_at_k)
        context = RecordWalker.instance().on_handler(recorder).handle(sample_person())

        assert recorder.count == k
        assert context.failed
        assert context.cause is error


class TestMetadataIsolation:

    def test_sibling_metadata_is_not_shared(self):
        def tag(event):
            event.item.put("seen", event.path)

        recorder = EventRecorder(on_event=tag)
        RecordWalker.instance().on_handler(recorder).handle(sample_person())

        items = [event.item for event in recorder.events]
        for item in items:
            assert item.get("seen") == item.path
        assert len({id(item.all_metadata()) for item in items}) == len(items)


class TestSmallWalks:

    def test_empty_record(self):
        recorder = EventRecorder()
        context = RecordWalker().on_handler(recorder).handle({})
        assert recorder.count == 0
        assert context.ended and context.success

    def test_record_with_nested_record(self):
        assert baseline({"a": "x", "b": {"c": "y"}}) == [(".a", "x"), (".b.c", "y")]

    def test_sequence_without_child_walkers(self):
        recorder = EventRecorder()
        SequenceWalker().on_handler(recorder).handle(["x", "y", "z"])
        assert recorder.paths == [".[0]", ".[1]", ".[2]"]
