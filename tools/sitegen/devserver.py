from __future__ import annotations

import functools
import pathlib
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import unquote


def resolve_dir_index(public_dir: pathlib.Path, url: str) -> Optional[pathlib.Path]:
    """
    Map /<dir> or /<dir>/ to public/<dir>/index.html when that file exists.

    The site root is left to the default handler, and nothing outside
    public_dir is ever returned.
    """
    path = unquote((url or "/").split("?", 1)[0])
    normalised = path if path.endswith("/") else path + "/"
    if normalised == "/":
        return None

    base = public_dir.resolve()
    candidate = (base / normalised.lstrip("/") / "index.html").resolve()
    if not candidate.is_relative_to(base):
        return None
    return candidate if candidate.is_file() else None


class DirIndexHandler(SimpleHTTPRequestHandler):
    def _dir_index(self) -> Optional[pathlib.Path]:
        return resolve_dir_index(pathlib.Path(self.directory), self.path)

    def do_GET(self):
        index = self._dir_index()
        if index is None:
            return super().do_GET()
        data = index.read_bytes()
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)


def make_server(
    public_dir: pathlib.Path, host: str = "127.0.0.1", port: int = 5173
) -> ThreadingHTTPServer:
    handler = functools.partial(DirIndexHandler, directory=str(public_dir))
    return ThreadingHTTPServer((host, port), handler)


def serve(public_dir: pathlib.Path, host: str = "127.0.0.1", port: int = 5173) -> None:
    httpd = make_server(public_dir, host, port)
    print(f"✓ serving {public_dir} at http://{host}:{httpd.server_address[1]}/")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("- stopped")
    finally:
        httpd.server_close()
