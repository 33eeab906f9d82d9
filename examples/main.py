import argparse
import logging
from pathlib import Path

from assoc import AssociativeContainer
from assoc.config import bind_config_file, ensure_required_config_values

INVENTORY = {
    'fruit': {'apple': 3, 'pear': 0, 'plum': 7},
    'veg': {'leek': 0, 'kale': 2},
    'bread': 1,
}


def main(config_file: Path | None) -> None:
    if config_file is not None:
        bind_config_file(config_file)
    ensure_required_config_values()

    stock = AssociativeContainer(INVENTORY)
    print('entries:', stock.count(), 'items:', stock.count(recursive=True))

    in_stock = AssociativeContainer(INVENTORY).filter(lambda amount: amount > 0, recursive=True)
    print('in stock:', in_stock.to_array())
    print('total:', in_stock.reduce(lambda carry, amount: carry + amount, 0, True, thread_carry=True))

    labels = AssociativeContainer(INVENTORY).map(lambda amount, name: f'{name}={amount}', recursive=True)
    print('labels:', labels.implode(recursive=True))

    shopping = AssociativeContainer()
    shopping.get_or_create('fruit').append('apple').append('plum')
    shopping.get_or_create('veg').append('kale')
    print('shopping:', shopping.implode(recursive=True))


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='assoc container walkthrough')
    parser.add_argument(
        '-c',
        '--config',
        type=Path,
        default=None,
        help='Optional, path to a settings file (supported extensions: *.json, *.yaml/yml, *.toml)',
    )
    logging.basicConfig(level=logging.DEBUG)
    main(parser.parse_args().config)
