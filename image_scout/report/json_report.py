# image_scout/report/json_report.py

"""
Manifest writer for ImageScout.

Serialises the collected ImageRecord list into ``index.json``.
"""
import json
from pathlib import Path
from typing import Iterable

from image_scout.crawler.models import ImageRecord


def render_json(records: Iterable[ImageRecord], output_path: Path | str) -> Path:
    """
    Save *records* as ``{"images": [...]}`` to *output_path*, indented by 4.

    :param records: downloaded images, in completion order
    :param output_path: path of the manifest file
    :return: Path of the saved file

    Example:
    ```python
    from image_scout.report.json_report import render_json
    manifest = render_json(result.images, 'images/index.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {"images": [record.to_dict() for record in records]}

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=4)

    return output
