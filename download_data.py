import argparse
import requests
from pathlib import Path

import constants
from unfolding.lines import LINE_FILES


def download_and_save(url: str, output_path: Path) -> bool:
    """Fetch one line file into ``output_path``; False when the request fails."""
    host = url.split("//")[-1].split("/")[0]
    print(f"[{output_path.stem}] fetching from {host}")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        response = requests.get(url, stream=True, timeout=constants.DOWNLOAD_TIMEOUT)
        response.raise_for_status()
        with open(output_path, "wb") as f:
            for chunk in filter(None, response.iter_content(chunk_size=64 * 1024)):
                f.write(chunk)
    except requests.exceptions.RequestException as e:
        print(f"[{output_path.stem}] failed: {e}")
        return False

    print(f"[{output_path.stem}] saved {output_path.stat().st_size} bytes to {output_path}")
    return True


def download_all_lines(base_url: str, data_dir: Path, lines: list[str] | None = None) -> list[str]:
    """Downloads every line CSV; returns the lines that failed."""
    failed = []
    for line in lines or list(LINE_FILES):
        name = LINE_FILES[line]
        url = f"{base_url.rstrip('/')}/{name}.csv"
        if not download_and_save(url, data_dir / f"{name}.csv"):
            failed.append(line)
    return failed


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Download the per-line CSV files.")
    parser.add_argument("--base-url", default=constants.DATA_BASE_URL, help="Folder URL serving final_*.csv")
    parser.add_argument("--data-dir", default=str(constants.DATA_DIR), help="Where to save the files")
    parser.add_argument("--line", action="append", choices=list(LINE_FILES), help="Only this line (repeatable)")
    args = parser.parse_args()

    if not args.base_url:
        parser.error("no base URL: pass --base-url or set UNFOLDING_DATA_BASE_URL")

    failed = download_all_lines(args.base_url, Path(args.data_dir), args.line)
    if failed:
        print(f"{len(failed)} line(s) could not be downloaded: {', '.join(failed)}")
        raise SystemExit(1)
