import threading
import time

import pytest

from athenadriver.client_cache import ClientCache, ReadWriteLock


class TestClientCache:
    def test_lookup_miss(self, client_cache):
        assert client_cache.lookup("us-east-1##") == (None, False)

    def test_insert_then_lookup(self, client_cache):
        client = object()
        client_cache.insert("us-east-1##", client)

        found_client, found = client_cache.lookup("us-east-1##")
        assert found
        assert found_client is client
        assert "us-east-1##" in client_cache
        assert len(client_cache) == 1

    def test_keys_are_exact(self, client_cache):
        client_cache.insert("us-east-1##", object())
        assert client_cache.lookup("us-east-1##AKIA1") == (None, False)
        assert client_cache.keys() == ["us-east-1##"]

    def test_insert_rejects_none(self, client_cache):
        with pytest.raises(ValueError):
            client_cache.insert("us-east-1##", None)
        assert "us-east-1##" not in client_cache

    def test_later_insert_replaces_earlier(self, client_cache):
        first, second = object(), object()
        client_cache.insert("k", first)
        client_cache.insert("k", second)

        assert client_cache.lookup("k") == (second, True)
        assert len(client_cache) == 1

    def test_default_is_process_wide(self):
        assert ClientCache.default() is ClientCache.default()

    def test_fresh_instances_are_independent(self):
        a, b = ClientCache(), ClientCache()
        a.insert("k", object())
        assert "k" not in b

    def test_concurrent_inserts_same_key(self, client_cache):
        barrier = threading.Barrier(16)
        clients = [object() for _ in range(16)]

        def worker(i):
            barrier.wait()
            client_cache.insert("k", clients[i])

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        client, found = client_cache.lookup("k")
        assert found
        assert any(client is c for c in clients)
        assert len(client_cache) == 1


class TestReadWriteLock:
    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=5)

        def reader():
            with lock.read_locked():
                # all three readers must be inside at the same time to pass
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert not inside.broken

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        writer_has_lock = threading.Event()

        def writer():
            with lock.write_locked():
                writer_has_lock.set()
                time.sleep(0.05)
                events.append("write-done")

        def reader():
            writer_has_lock.wait()
            with lock.read_locked():
                events.append("read")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join()
        r.join()

        assert events == ["write-done", "read"]

    def test_waiting_writer_gets_in_after_reader_releases(self):
        lock = ReadWriteLock()
        lock.acquire_read()
        acquired = threading.Event()

        def writer():
            with lock.write_locked():
                acquired.set()

        t = threading.Thread(target=writer)
        t.start()
        assert not acquired.wait(0.05)

        lock.release_read()
        t.join(timeout=5)
        assert acquired.is_set()
