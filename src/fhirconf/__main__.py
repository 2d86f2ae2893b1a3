from __future__ import annotations

import argparse

from .runtime.server import run


def main() -> None:
    p = argparse.ArgumentParser(prog="fhirconf", description="fhirconf: serve a FHIR conformance statement")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    args = p.parse_args()

    srv = run(host=args.host, port=args.port)
    print(srv.url + "metadata")

    # Block forever (so it behaves like a normal CLI server)
    import time

    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
