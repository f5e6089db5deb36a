"""Tests for pausing a walk and resuming it later, possibly from another thread."""

import threading

from dazzlewalk import RecordWalker, SequenceWalker, WalkContext, WalkState
from dazzlewalk.testing import EventRecorder, sample_person


ALL_PATHS = [
    ".name", ".age",
    ".address.street", ".address.city",
    ".hobbies[0]", ".hobbies[1]", ".hobbies[2]",
    ".phones[0].type", ".phones[0].number",
    ".phones[1].type", ".phones[1].number",
]


class TestPauseSameThread:

    def test_pause_returns_control_to_caller(self):
        recorder = EventRecorder(on_event=lambda e: e.path == ".address.street" and e.pause())
        context = RecordWalker.instance().on_handler(recorder).handle(sample_person())

        assert context.paused
        assert context.state is WalkState.PAUSED
        assert not context.ended
        assert recorder.paths == ALL_PATHS[:3]

        context.resume()
        assert context.ended
        assert recorder.paths == ALL_PATHS

    def test_pause_skips_remaining_handlers_for_item(self):
        calls = []
        walker = RecordWalker.instance()
        walker.on_handler(lambda e: (calls.append(("pauser", e.path)), e.pause()))
        walker.on_handler(lambda e: calls.append(("other", e.path)))
        context = walker.handle({"a": 1, "b": 2})

        assert calls == [("pauser", ".a")]
        context.resume()
        assert context.paused
        assert calls == [("pauser", ".a"), ("pauser", ".b")]
        context.resume()
        assert context.ended

    def test_pause_on_container_keeps_its_subtree(self):
        def handler(event):
            if event.path == ".address":
                event.pause()

        recorder = EventRecorder(on_event=handler)
        walker = RecordWalker([RecordWalker(fire_entry_event=True), SequenceWalker()])
        context = walker.on_handler(recorder).handle(sample_person())
        assert recorder.paths[-1] == ".address"
        # The container's level was pushed before the walk stopped
        assert context.level_index == 2

        context.resume()
        assert recorder.paths[3:5] == [".address.street", ".address.city"]
        assert context.ended

    def test_resume_and_pause_are_noops_in_wrong_state(self):
        context = RecordWalker.instance().handle({"a": 1})
        assert context.ended
        context.resume()
        context.pause()
        assert context.state is WalkState.ENDED

        fresh = WalkContext()
        fresh.resume()
        assert fresh.state is WalkState.ACTIVE

    def test_end_while_paused(self):
        ended = []
        walker = RecordWalker.instance().on_end(ended.append)
        walker.on_handler(lambda e: e.pause())
        context = walker.handle({"a": {"b": 1}, "c": 2})
        assert context.level_index == 2

        context.end()
        assert context.ended
        assert context.level_index == 0
        assert ended == [context]
        context.resume()
        assert context.ended


class TestPauseAcrossThreads:

    def test_resume_from_timer_thread(self):
        def handler(event):
            event.pause()
            threading.Timer(0.01, event.context.resume).start()

        recorder = EventRecorder(on_event=handler)
        context = RecordWalker.instance().on_handler(recorder).handle(sample_person())

        assert context.join(timeout=5), "walk did not end"
        assert context.success
        assert recorder.paths == ALL_PATHS

    def test_concurrent_resume_runs_one_driver(self):
        active = []
        overlap = []
        lock = threading.Lock()

        def handler(event):
            with lock:
                if active:
                    overlap.append(event.path)
                active.append(event.path)
            event.pause()
            with lock:
                active.remove(event.path)

        walker = RecordWalker.instance().on_handler(handler)
        context = walker.handle({f"k{i}": i for i in range(50)})

        def hammer():
            while not context.ended:
                context.resume()

        threads = [threading.Thread(target=hammer) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert context.join(timeout=5)
        assert overlap == []

    def test_done_callback_fires_once_from_resuming_thread(self):
        done = []
        walker = RecordWalker.instance().on_handler(lambda e: e.pause())
        context = walker.handle({"a": 1})
        context.add_done_callback(lambda ctx: done.append(threading.current_thread().name))

        def finish():
            while not context.ended:
                context.resume()

        thread = threading.Thread(target=finish, name="resumer")
        thread.start()
        thread.join(timeout=5)

        assert done == ["resumer"]
