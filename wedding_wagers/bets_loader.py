"""
Seed bets loader from CSV
"""
import csv
import logging
from pathlib import Path
from typing import List

from wedding_wagers.models import Bet, BetKind


logger = logging.getLogger(__name__)


def load_bets(csv_path: str) -> List[Bet]:
    """
    Load seed bets from CSV file

    CSV format (options separated by '|', empty for open-ended bets):
        question,kind,options
        Who will cry first?,multiple-choice,Bride|Groom|Mother of the Bride|Best Man
        What song opens the dance floor?,open-ended,

    Args:
        csv_path: Path to CSV file

    Returns:
        List of Bet (without ids; the store assigns them)

    Raises:
        FileNotFoundError: If CSV file not found
        ValueError: If a row is malformed
    """
    path = Path(csv_path)

    if not path.exists():
        raise FileNotFoundError(f"Bets file not found: {csv_path}")

    bets = []

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)

        for line_no, row in enumerate(reader, start=2):
            question = (row.get('question') or '').strip()
            kind_raw = (row.get('kind') or '').strip().lower()
            options_raw = (row.get('options') or '').strip()

            if not question:
                raise ValueError(f"Line {line_no}: question is required")

            try:
                kind = BetKind(kind_raw)
            except ValueError:
                raise ValueError(f"Line {line_no}: unknown bet kind '{kind_raw}'") from None

            options = [o.strip() for o in options_raw.split('|') if o.strip()]

            if kind == BetKind.MULTIPLE_CHOICE and not options:
                raise ValueError(f"Line {line_no}: multiple-choice bet needs options")
            if kind == BetKind.OPEN_ENDED:
                options = []

            bets.append(Bet(question_text=question, kind=kind, options=options))

    logger.info(f"Loaded {len(bets)} seed bets from {csv_path}")

    return bets
