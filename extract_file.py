"""
Extract plain text from local files via the configured Tika server (no API needed).
Run from the project folder: python extract_file.py <file> [<file> ...]
"""
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)


def main(paths: list[str]) -> int:
    from app.config import settings
    from app.dependencies import get_extractor
    from app.services.extraction_service import TextExtractionService

    if not paths:
        print("usage: python extract_file.py <file> [<file> ...]", file=sys.stderr)
        return 2

    extractor = get_extractor()
    service = TextExtractionService(extractor, min_version=settings.tika_min_version)

    # 1. Server status
    print(f"[1/2] Checking Tika at {settings.tika_url} ...")
    server = service.status()
    if not server.available:
        print("  FAIL - server unavailable or too old", file=sys.stderr)
        return 1
    print(f"  OK - Apache Tika {server.version}")

    # 2. Extract each file
    print(f"\n[2/2] Extracting {len(paths)} file(s)...")
    failed = 0
    for path in paths:
        result = service.extract(path)
        if not result.ok:
            failed += 1
            detail = result.error or f"{result.status_code} {result.reason}"
            print(f"\n  FAIL - {path}: {detail}", file=sys.stderr)
            continue
        print(f"\n  >> {path} ({len(result.text)} chars)")
        print(result.text)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.exit(main(sys.argv[1:]))
