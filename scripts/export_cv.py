import sys
import os
import argparse
from pathlib import Path

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv

load_dotenv()

from portfolio.config import get_settings
from portfolio.dependencies import get_cv_exporter, get_portfolio_store
from portfolio.services.data_provider import DataProviderError, PortfolioDataProvider


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch the portfolio once and write the CV PDF.")
    parser.add_argument("-o", "--output-dir", default=".", help="Directory to write the PDF into")
    args = parser.parse_args()

    store = get_portfolio_store()
    try:
        store.set(PortfolioDataProvider(get_settings()).fetch())
    except DataProviderError as e:
        print(f"❌ Could not load portfolio data: {e}")
        return 1

    document = get_cv_exporter().export(store.get())
    out = Path(args.output_dir) / document.filename
    out.write_bytes(document.content)
    print(f"✅ {out} ({document.page_count} page(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
