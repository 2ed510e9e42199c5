from __future__ import annotations

import threading

from squee.emitter import EventEmitter


def test_concurrent_subscribe_and_emit_keeps_every_listener() -> None:
    emitter = EventEmitter()
    seen = []
    seen_lock = threading.Lock()

    def subscribe(worker_id: int) -> None:
        for idx in range(50):
            def listener(value, worker_id=worker_id, idx=idx) -> None:
                with seen_lock:
                    seen.append((worker_id, idx, value))

            emitter.on("tick", listener)

    workers = [threading.Thread(target=subscribe, args=(worker_id,)) for worker_id in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert emitter.listener_count("tick") == 200

    emitter.emit("tick", "go")

    assert len(seen) == 200


def test_first_only_listeners_fire_once_across_threads() -> None:
    emitter = EventEmitter()
    calls = []
    calls_lock = threading.Lock()

    def first(value) -> None:
        with calls_lock:
            calls.append(value)

    emitter.on_first("ready", first)

    workers = [threading.Thread(target=emitter.emit, args=("ready", idx)) for idx in range(8)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert len(calls) == 1
    assert emitter.first_args("ready") == (calls[0],)
