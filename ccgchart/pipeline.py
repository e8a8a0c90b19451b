"""
Batch conversion of treebank files.

Each tree line is read, labeled, and turned into a JSON-friendly record
(derivation chart, supertagged sentence, or labeled tree). Malformed trees are
logged and skipped unless the run is strict.
"""
import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Tuple

from .config import ConverterConfig
from .converter import ParseTreeConverter, create_converter
from .errors import ConversionError
from .io_util import is_standard_stream, open_iterator, open_out, read_lines
from .labels import NodeLabel, NonterminalLabel, TerminalLabel
from .logging_config import ProgressLogger, log_with_context
from .treebank import TreebankReader
from .tree import ParseTree

logger = logging.getLogger(__name__)


@dataclass
class ConversionStats:
    total: int = 0
    converted: int = 0
    failed: int = 0


@dataclass
class TreebankStatistics:
    """Counts gathered over the trees of a treebank."""
    sentences: int = 0
    tokens: int = 0
    failed: int = 0
    categories: Counter = field(default_factory=Counter)
    rule_types: Counter = field(default_factory=Counter)


def label_to_dict(label: NodeLabel) -> Dict[str, Any]:
    if isinstance(label, TerminalLabel):
        return {
            "category": label.category.text,
            "word": label.word.text,
            "base_form": label.base_form.text,
            "pos": label.pos.text,
        }
    if isinstance(label, NonterminalLabel):
        return {
            "category": label.category.text,
            "head": label.head.value,
            "rule_type": label.rule_type,
        }
    raise TypeError(f"Unknown label type: {type(label).__name__}")


def tree_to_dict(tree: ParseTree[NodeLabel]) -> Dict[str, Any]:
    node = label_to_dict(tree.label)
    if tree.children:
        node["children"] = [tree_to_dict(child) for child in tree.children]
    return node


def convert_tree(string_tree: ParseTree[str], converter: ParseTreeConverter, output: str) -> Dict[str, Any]:
    """Convert one raw tree into the record selected by `output`."""
    label_tree = converter.to_label_tree(string_tree)
    if output == "sentence":
        return converter.to_sentence_from_label_tree(label_tree).to_dict()
    if output == "tree":
        return tree_to_dict(label_tree)
    record = converter.to_derivation(label_tree).to_dict()
    record["sentence"] = converter.to_sentence_from_label_tree(label_tree).to_dict()
    return record


def convert_lines(lines: Iterable[str],
                  converter: ParseTreeConverter,
                  reader: TreebankReader,
                  output: str = "derivation",
                  strict: bool = False,
                  stats: ConversionStats = None) -> Iterator[Tuple[int, Dict[str, Any]]]:
    """
    Yield (line number, record) for every convertible tree line.

    Raises:
        ConversionError: On the first malformed tree when `strict` is set.
    """
    stats = stats if stats is not None else ConversionStats()
    for line_no, line in enumerate(lines, 1):
        if not reader.is_tree_line(line):
            continue
        stats.total += 1
        try:
            record = convert_tree(reader.read_tree(line), converter, output)
        except ConversionError as e:
            stats.failed += 1
            if strict:
                logger.error(f"Line {line_no}: {e}")
                raise
            log_with_context(f"Skipping line {line_no}: {e}", {"line": line},
                             level=logging.WARNING, logger=logger)
            continue
        stats.converted += 1
        yield line_no, record


def convert_file(config: ConverterConfig, converter: ParseTreeConverter = None) -> ConversionStats:
    """
    Convert config.input_path and write one JSON object per line.

    Input "-" is read from stdin in a single pass, so the progress log has no
    total. Output "-" or None goes to stdout.
    """
    converter = converter or create_converter(config.dialect)
    reader = TreebankReader(config.dialect)
    logger.info("Options:\n" + config.describe())

    if is_standard_stream(config.input_path):
        total = None
        logger.info(f"Converting trees from stdin ({config.dialect}, output={config.output})")
    else:
        total = sum(1 for line in open_iterator(config.input_path) if reader.is_tree_line(line))
        logger.info(f"Converting {total} trees from {config.input_path} ({config.dialect}, output={config.output})")

    stats = ConversionStats()
    progress = ProgressLogger(total, desc="Converting", logger=logger)
    to_stdout = config.output_path is None or is_standard_stream(config.output_path)
    out = sys.stdout if to_stdout else open_out(config.output_path)
    seen, failed = 0, 0
    try:
        for line_no, record in convert_lines(read_lines(config.input_path), converter, reader,
                                             config.output, config.strict, stats):
            record["line"] = line_no
            out.write(json.dumps(record, ensure_ascii=False) + "\n")
            progress.update(stats.total - seen, failed=stats.failed - failed)
            seen, failed = stats.total, stats.failed
    finally:
        if not to_stdout:
            out.close()
    if stats.total != seen:
        # trees that failed after the last converted one
        progress.update(stats.total - seen, failed=stats.failed - failed)
    progress.close()

    logger.info(f"Converted {stats.converted}/{stats.total} trees ({stats.failed} failed)")
    logger.info(f"Dictionary: {converter.dictionary!r}")
    return stats


def collect_statistics(lines: Iterable[str], converter: ParseTreeConverter,
                       reader: TreebankReader) -> TreebankStatistics:
    """Count sentences, tokens, lexical categories and rule types."""
    result = TreebankStatistics()
    for line in lines:
        if not reader.is_tree_line(line):
            continue
        try:
            label_tree = converter.to_label_tree(reader.read_tree(line))
        except ConversionError as e:
            result.failed += 1
            logger.warning(f"Skipping malformed tree: {e}")
            continue
        result.sentences += 1
        for node in label_tree.nodes():
            if node.is_leaf:
                result.tokens += 1
                result.categories[node.label.category.text] += 1
            else:
                result.rule_types[node.label.rule_type or "-"] += 1
    return result
