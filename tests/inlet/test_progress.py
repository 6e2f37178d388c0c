import asyncio

from fabricctl.inlet.progress import CompletionFlag, ProgressReporter


def test_reporter_shows_milestones_then_stops_on_flag():
    flag = CompletionFlag()
    seen = []

    async def scenario():
        reporter = ProgressReporter(["one", "two", "three"], flag, seen.append,
                                    poll_interval=0.005, message_interval=0.01)
        task = asyncio.ensure_future(reporter.run())
        await asyncio.sleep(0.1)
        assert not task.done()
        await flag.set()
        await asyncio.wait_for(task, 1.0)

    asyncio.run(scenario())
    assert seen == ["one", "two", "three"]


def test_reporter_stops_early_when_flag_already_set():
    flag = CompletionFlag()
    seen = []

    async def scenario():
        await flag.set()
        await ProgressReporter(["one", "two"], flag, seen.append).run()

    asyncio.run(scenario())
    assert seen == []


def test_reporter_stops_when_engine_fails():
    flag = CompletionFlag()
    seen = []

    async def failing_engine():
        await asyncio.sleep(0.02)
        raise RuntimeError("fatal")

    async def scenario():
        engine = asyncio.ensure_future(failing_engine())
        reporter = ProgressReporter(["a", "b", "c", "d"], flag, seen.append,
                                    poll_interval=0.005, message_interval=10)
        await asyncio.wait_for(reporter.run(engine), 1.0)
        assert engine.done()
        assert isinstance(engine.exception(), RuntimeError)

    asyncio.run(scenario())
    assert seen == ["a"]


def test_reporter_swallows_emit_errors():
    flag = CompletionFlag()

    def broken(msg):
        raise OSError("terminal went away")

    async def scenario():
        await asyncio.wait_for(ProgressReporter(["x"], flag, broken).run(), 1.0)

    # returns normally instead of raising
    asyncio.run(scenario())
