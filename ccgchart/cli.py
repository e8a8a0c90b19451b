"""
Command-line interface for ccgchart.

- convert: Convert a treebank file into JSON lines (charts, sentences or trees)
- show: Print the labeled tree and derivation chart of one tree
- stats: Count sentences, tokens, categories and rule types of a treebank
"""
import sys
import argparse
import json
from pathlib import Path

from tqdm import tqdm

from .config import ConverterConfig, load_props
from .converter import create_converter
from .errors import ConversionError
from .io_util import read_lines
from .logging_config import setup_logging
from .pipeline import collect_statistics, convert_file, tree_to_dict
from .treebank import TreebankReader

DIALECTS = ['japanese', 'ja', 'english', 'en', 'simple']


def cmd_convert(args):
    """Convert a treebank file into JSON lines."""
    try:
        props = load_props(args.config) if args.config else {}
        overrides = {
            "dialect": args.dialect,
            "input": args.file,
            "output": args.out,
            "kind": args.kind,
            "log": args.log,
            "strict": "true" if args.strict else None,
            "debug": "true" if args.debug else None,
        }
        props.update({key: value for key, value in overrides.items() if value is not None})
        config = ConverterConfig.from_props(props)
    except ConversionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(log_file=config.log_file, debug=config.debug)
    try:
        stats = convert_file(config)
    except (ConversionError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Converted {stats.converted}/{stats.total} trees ({stats.failed} failed)", file=sys.stderr)
    return 0 if stats.failed == 0 else 2


def cmd_show(args):
    """Print the labeled tree and derivation chart of a single tree."""
    converter = create_converter(args.dialect)
    reader = TreebankReader(args.dialect)

    if args.tree:
        line = args.tree
    else:
        print("Enter a bracketed tree:", file=sys.stderr)
        try:
            line = input().strip()
        except EOFError:
            print("ERROR: no tree given on stdin", file=sys.stderr)
            return 1

    try:
        label_tree = converter.to_label_tree(reader.read_tree(line))
        sentence = converter.to_sentence_from_label_tree(label_tree)
        derivation = converter.to_derivation(label_tree)
    except ConversionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(json.dumps({
            "tree": tree_to_dict(label_tree),
            "sentence": sentence.to_dict(),
            "derivation": derivation.to_dict(),
        }, indent=2, ensure_ascii=False))
    else:
        print("Sentence: " + " ".join(w.text for w in sentence.words))
        print("Categories: " + " ".join(c.text for c in sentence.categories))
        print(f"\nDerivation ({derivation.num_entries()} entries):")
        print(derivation.render())
    return 0


def cmd_stats(args):
    """Print corpus statistics."""
    converter = create_converter(args.dialect)
    reader = TreebankReader(args.dialect)

    lines = tqdm(read_lines(args.file), desc="Reading trees", unit=" lines", disable=args.quiet)
    try:
        stats = collect_statistics(lines, converter, reader)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"File: {args.file}")
    print(f"Sentences: {stats.sentences:,}")
    print(f"Tokens: {stats.tokens:,}")
    print(f"Malformed trees: {stats.failed:,}")
    print(f"Distinct lexical categories: {len(stats.categories):,}")
    print(f"\nTop {args.top} lexical categories:")
    for category, count in stats.categories.most_common(args.top):
        print(f"  {count:>8,}  {category}")
    print(f"\nRule types:")
    for rule_type, count in stats.rule_types.most_common():
        print(f"  {count:>8,}  {rule_type}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ccgchart',
        description='ccgchart: convert CCGbank trees into derivation charts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Derivation charts of the Japanese CCGbank training set
  ccgchart convert train.ccgbank --dialect japanese --out train.jsonl

  # Gold supertagged sentences of an English AUTO file
  ccgchart convert wsj_0001.auto.gz --dialect english --kind sentence

  # Read trees from stdin
  zcat train.ccgbank.gz | ccgchart convert - --dialect ja --out train.jsonl

  # Inspect one tree
  ccgchart show "(<T NP 0 2> (<L NP/N DT DT the NP/N>) (<L N NN NN dog N>))" --dialect en

  # Corpus statistics
  ccgchart stats train.ccgbank --dialect ja --top 30
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # --- convert command ---
    parser_convert = subparsers.add_parser('convert', help='Convert a treebank file into JSON lines')
    parser_convert.add_argument('file', nargs='?', type=Path, help='Treebank file (.gz allowed, - for stdin)')
    parser_convert.add_argument('-d', '--dialect', choices=DIALECTS, help='Treebank dialect')
    parser_convert.add_argument('-k', '--kind', choices=['derivation', 'sentence', 'tree'],
                                help='What to emit per tree (default: derivation)')
    parser_convert.add_argument('-c', '--config', type=Path, help='Properties file with default options')
    parser_convert.add_argument('-o', '--out', type=Path, help='Output file (default: stdout)')
    parser_convert.add_argument('--strict', action='store_true', help='Stop at the first malformed tree')
    parser_convert.add_argument('--log', type=Path, help='Also write logs to this file')
    parser_convert.add_argument('--debug', action='store_true', help='Verbose logging')
    parser_convert.set_defaults(func=cmd_convert)

    # --- show command ---
    parser_show = subparsers.add_parser('show', help='Show the derivation chart of one tree')
    parser_show.add_argument('tree', nargs='?', help='Bracketed tree (read from stdin if omitted)')
    parser_show.add_argument('-d', '--dialect', required=True, choices=DIALECTS, help='Treebank dialect')
    parser_show.add_argument('--format', choices=['text', 'json'], default='text',
                             help='Output format (default: text)')
    parser_show.set_defaults(func=cmd_show)

    # --- stats command ---
    parser_stats = subparsers.add_parser('stats', help='Show treebank statistics')
    parser_stats.add_argument('file', type=Path, help='Treebank file (.gz allowed, - for stdin)')
    parser_stats.add_argument('-d', '--dialect', required=True, choices=DIALECTS, help='Treebank dialect')
    parser_stats.add_argument('--top', type=int, default=20, help='Number of categories to list (default: 20)')
    parser_stats.add_argument('-q', '--quiet', action='store_true', help='Hide the progress bar')
    parser_stats.set_defaults(func=cmd_stats)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
