import threading
import time

from ballotbox.database.locking import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)
    broken = []

    def reader():
        with lock.read():
            # all three readers must be inside at once to pass the barrier
            try:
                inside.wait()
            except threading.BrokenBarrierError:
                broken.append(True)

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert broken == []


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []

    lock.acquire_write()

    def reader():
        with lock.read():
            events.append("read")

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    events.append("write-done")
    lock.release_write()
    t.join(timeout=5)

    assert events == ["write-done", "read"]


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    events = []
    lock.acquire_read()

    def writer():
        with lock.write():
            events.append("write")

    def late_reader():
        with lock.read():
            events.append("late-read")

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.05)
    assert events == []

    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)
    assert events == ["write", "late-read"]


def test_lock_released_on_exception():
    lock = ReadWriteLock()
    try:
        with lock.write():
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    with lock.read():
        pass
    with lock.write():
        pass
