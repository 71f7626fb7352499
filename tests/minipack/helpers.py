"""
Test doubles: in-memory tarballs, a fake HTTP layer and a fake npm registry.
"""

import io
import tarfile


def make_tarball(files, root="package"):
    """Build a gzipped tarball holding {files} (relative path -> text) under {root}/."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        for rel_path, content in files.items():
            data = content.encode()
            info = tarfile.TarInfo(f"{root}/{rel_path}" if root else rel_path)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, body=b"", status_code=200, reason="OK"):
        self.body = body
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeHttp:
    """Serves registered URLs; anything else is a 404."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, body=b"", status_code=200, reason="OK"):
        self.routes[url] = FakeResponse(body, status_code, reason)

    def fail(self, url, exc):
        self.routes[url] = exc

    def get(self, url, stream=False, **kwargs):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(b"", 404, "Not Found")
        if isinstance(route, Exception):
            raise route
        return route


class FakeRegistry:
    def __init__(self, records):
        self.records = records
        self.queries = []

    def query(self, identifier):
        self.queries.append(identifier)
        return list(self.records)
