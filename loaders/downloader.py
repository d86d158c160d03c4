"""
Download of the HES outpatient workbook from NHS Digital.

Functions:
    download_source: Fetch the workbook to a local file (skips if already present)
"""

import os

import requests

from .config import SOURCE_URL, EXCEL_FILE, DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE


def download_source(url=SOURCE_URL, dest=EXCEL_FILE, force=False, timeout=DOWNLOAD_TIMEOUT):
    """
    Download the source workbook.

    The body is streamed to '<dest>.part' and renamed once complete, so an
    interrupted download never leaves a truncated workbook at dest.

    Args:
        url: Source URL
        dest: Local file path
        force: Download even if dest already exists
        timeout: Request timeout in seconds

    Returns:
        str: Path of the downloaded (or existing) file

    Raises:
        requests.RequestException: Network failure or non-2xx response
    """
    if os.path.exists(dest) and not force:
        print(f"Using existing file: {dest}")
        return dest

    print(f"Downloading {url}...")
    parent = os.path.dirname(dest)
    if parent:
        os.makedirs(parent, exist_ok=True)

    part_path = f"{dest}.part"
    with requests.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        try:
            with open(part_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except BaseException:
            if os.path.exists(part_path):
                os.remove(part_path)
            raise

    os.replace(part_path, dest)
    print(f"  Saved {os.path.getsize(dest)} bytes to {dest}")
    return dest
