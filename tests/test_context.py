import os
import unittest

from tempfile import TemporaryDirectory

from tftplite.context import Session,Metrics,READ,WRITE
from tftplite.states import DuplicatePolicy
from tftplite.storage import FileStorage
from tftplite.exceptions import TftpException,TftpFileNotFoundError

PEER = ('127.0.0.2', 10000)

class TestTftpliteSession(unittest.TestCase):

    def setUp(self):
        self.root = TemporaryDirectory()
        self.storage = FileStorage(self.root.name)

    def tearDown(self):
        self.root.cleanup()

    def make_session(self, direction=WRITE):
        fileobj = self.storage.open_write('session.bin')
        return Session(PEER, direction, 'session.bin', fileobj)

    def test_session_block_rollover(self):
        session = self.make_session()
        self.assertEqual(session.block, 0)
        self.assertEqual(session.next_block, 1)
        session.block = 65535
        self.assertEqual(session.next_block, 0)
        session.block = 65536
        self.assertEqual(session.block, 0, "block number rolls over")
        session.end(self.storage)

    def test_session_is_peer(self):
        session = self.make_session(READ)
        self.assertTrue(session.is_peer(('127.0.0.2', 10000)))
        self.assertFalse(session.is_peer(('127.0.0.2', 10001)))
        self.assertFalse(session.is_peer(('127.0.0.3', 10000)))
        session.end(self.storage)

    def test_session_end_closes_file(self):
        session = self.make_session()
        fileobj = session.fileobj
        session.end(self.storage)
        self.assertTrue(fileobj.closed)
        self.assertIsNone(session.fileobj)
        self.assertGreater(session.metrics.end_time, 0)
        # A second call is harmless.
        session.end(self.storage)

    def test_duplicate_policy(self):
        session = self.make_session()
        policy = DuplicatePolicy()
        for _ in range(10):
            self.assertFalse(policy.register(session))
        self.assertTrue(policy.register(session), "11th duplicate gives up")
        self.assertEqual(session.metrics.dupcount, 11)
        policy.clear(session)
        self.assertEqual(session.dups, 0)
        session.end(self.storage)

    def test_metrics_compute(self):
        metrics = Metrics()
        metrics.bytes = 1024
        metrics.start_time = 10
        metrics.end_time = 12
        metrics.compute()
        self.assertEqual(metrics.duration, 2)
        self.assertEqual(metrics.bps, 4096.0)
        self.assertEqual(metrics.kbps, 4.0)

    def test_metrics_compute_no_duration(self):
        metrics = Metrics()
        metrics.bytes = 1024
        metrics.compute()
        self.assertEqual(metrics.kbps, 0)


class TestTftpliteStorage(unittest.TestCase):

    def setUp(self):
        self.root = TemporaryDirectory()
        self.storage = FileStorage(self.root.name)

    def tearDown(self):
        self.root.cleanup()

    def test_storage_missing_root(self):
        with self.assertRaises(FileNotFoundError):
            FileStorage(os.path.join(self.root.name, 'nope'))

    def test_storage_insecure_path(self):
        for name in ['../setup.py', 'a/../../b', '']:
            with self.assertRaises(TftpException):
                self.storage.full_path(name)

    def test_storage_secure_path(self):
        path = self.storage.full_path('/sub/file.bin')
        self.assertEqual(path, os.path.join(self.storage.root, 'sub', 'file.bin'))

    def test_storage_write_read_delete(self):
        fileobj = self.storage.open_write('dir/sub/file.bin')
        self.storage.append(fileobj, b"hello ")
        self.storage.append(fileobj, b"world")
        self.storage.close(fileobj)
        self.assertTrue(os.path.isdir(os.path.join(self.storage.root, 'dir', 'sub')))

        fileobj = self.storage.open_read('dir/sub/file.bin')
        self.assertEqual(self.storage.read_chunk(fileobj, 6), b"hello ")
        self.assertEqual(self.storage.read_chunk(fileobj, 512), b"world")
        self.assertEqual(self.storage.read_chunk(fileobj, 512), b"")
        self.storage.close(fileobj)

        self.storage.delete('dir/sub/file.bin')
        self.assertFalse(os.path.exists(self.storage.full_path('dir/sub/file.bin')))
        # Deleting it again only logs.
        self.storage.delete('dir/sub/file.bin')

    def test_storage_read_missing(self):
        with self.assertRaises(TftpFileNotFoundError):
            self.storage.open_read('missing.bin')
