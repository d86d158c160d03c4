import json
import os
import sys

# Add project root to sys.path
sys.path.append(os.getcwd())

from loaders import load_summary_tables
from loaders.config import OUTPUT_DIR
from reshape import ReshapeError, reshape_all
from services import ChartService


def export_data(output_dir=None, path=None):
    data_dir = os.path.join(output_dir or OUTPUT_DIR, 'data')
    os.makedirs(data_dir, exist_ok=True)

    print("Loading and reshaping tables...")
    service = ChartService(reshape_all(load_summary_tables(path)))

    for name in service.chart_names():
        print(f"Exporting {name}...")
        service.get_table(name).to_csv(os.path.join(data_dir, f'{name}.csv'), index=False)
        with open(os.path.join(data_dir, f'{name}.json'), 'w') as f:
            json.dump(service.get_records(name), f, indent=2)

    print(f"Export complete. Files saved to {data_dir}")
    return data_dir


if __name__ == '__main__':
    try:
        export_data()
    except ReshapeError as e:
        print(f"Error exporting data: {e}")
        sys.exit(1)
