import json
import logging
import pandas as pd
import requests
from pathlib import Path
from typing import Any, Optional

from . import settings
from . import utils
from .schemas import SaleRecord

logger = logging.getLogger(__name__)


def save_outputs(validated_data: list[SaleRecord], report_name: str) -> Optional[Path]:
    """
    Appends sale records to the day's CSV report and, if configured, its JSON twin.
    Earlier sessions' rows in the same day's files are kept.
    """
    if not validated_data:
        logger.warning("No data to save to disk.")
        return None

    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"

    rows = [item.model_dump(mode="json", by_alias=True) for item in validated_data]
    df = pd.DataFrame(rows)

    # Header only when starting a new day's file
    write_header = not csv_path.exists()
    df.to_csv(csv_path, mode="a", header=write_header, index=False)
    logger.info(f"✅ {len(rows)} sales appended to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        existing = []
        if json_path.exists():
            with open(json_path, encoding="utf-8") as f:
                existing = json.load(f)
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(existing + rows, f, indent=2, default=str)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return csv_path


def post_to_webhook(
    validated_data: list[SaleRecord],
    metadata: Optional[dict[str, Any]] = None,
    report_type: str = "sales",
) -> bool:
    """
    Posts the sale records and a metadata summary to the webhook.
    Returns True when the webhook accepted the payload.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} data to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [
            item.model_dump(mode="json", by_alias=True) for item in validated_data
        ],
        "metadata": metadata or {},
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Data successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
