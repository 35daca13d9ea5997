#!/usr/bin/env python3
"""
Word (.docx) study notes to docsify site converter.

Files named like "第一章 第一题.docx" are converted to Markdown and laid out as
<chapter>/<problem>.md, with per-chapter indexes, a top-level README.md and a
_sidebar.md.
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, NamedTuple, Optional
from urllib.parse import quote

import mammoth
from markdownify import markdownify

logger = logging.getLogger(__name__)

DOCX_SUFFIX = '.docx'
UNCLASSIFIED = '未分章'
SITE_TITLE = '算法分析复习'

CHAPTER_TITLES = MappingProxyType({
    1: '基础知识',
    2: '分治策略',
    3: '动态规划',
    4: '贪心法',
    5: '回溯与分支界限',
})

NUMERALS = MappingProxyType({
    '零': 0, '一': 1, '二': 2, '三': 3, '四': 4,
    '五': 5, '六': 6, '七': 7, '八': 8, '九': 9,
})

CHAPTER_PATTERN = re.compile(r'第(.+?)章')
PROBLEM_PATTERN = re.compile(r'第(.+?)题')
DOCX_SUFFIX_PATTERN = re.compile(r'\.docx$', re.IGNORECASE)
FENCE_PATTERN = re.compile(r'(^```.*?^```[ \t]*$)', re.MULTILINE | re.DOTALL)

# Chapter labels become directory names under the site root
RESERVED_DIRS = frozenset({'.', '..'})

# Characters left alone by JavaScript's encodeURI
URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


class ConversionError(Exception):
    """Raised when a document cannot be turned into Markdown."""

    def __init__(self, path: Path, error: Exception):
        self.path = Path(path)
        super().__init__(f"{self.path.name}: {error}")


class Classification(NamedTuple):
    chapter: str
    problem: str
    chapter_num: int
    problem_num: int


def chinese_to_number(text: str) -> int:
    """Decode a Chinese numeral below one hundred.

    Only the tens-and-units composition is understood ("十", "十二", "三十",
    "九十九"). Anything else, including hundreds, decodes to 0.
    """
    if not text:
        return 0
    if text == '十':
        return 10
    if '十' in text:
        ten, _, unit = text.partition('十')
        tens = NUMERALS.get(ten) if ten else 1
        units = NUMERALS.get(unit) if unit else 0
        if tens is None or units is None:
            return 0
        return tens * 10 + units
    return NUMERALS.get(text, 0)


def parse_filename(filename: str) -> Classification:
    """Classify a file named "<chapter> <problem>.docx"."""
    base = DOCX_SUFFIX_PATTERN.sub('', filename)
    parts = base.split()
    if len(parts) >= 2:
        chapter, problem = parts[0], parts[1]
    else:
        chapter, problem = UNCLASSIFIED, base

    chapter_match = CHAPTER_PATTERN.fullmatch(chapter)
    problem_match = PROBLEM_PATTERN.fullmatch(problem)
    chapter_num = chinese_to_number(chapter_match.group(1)) if chapter_match else 0
    problem_num = chinese_to_number(problem_match.group(1)) if problem_match else 0

    if chapter_num in CHAPTER_TITLES:
        chapter = f'{chapter}：{CHAPTER_TITLES[chapter_num]}'

    return Classification(chapter, problem, chapter_num, problem_num)


def encode_uri(text: str) -> str:
    """Percent-encode a site path the way encodeURI does."""
    return quote(text, safe=URI_SAFE)


def find_documents(input_dir: Path) -> List[Path]:
    """List .docx files directly inside input_dir, sorted by name."""
    return sorted(
        (p for p in Path(input_dir).iterdir() if p.is_file() and p.suffix.lower() == DOCX_SUFFIX),
        key=lambda p: p.name,
    )


def write_text(path: Path, content: str) -> None:
    """Write content, creating parent directories and replacing any old file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    logger.debug("Wrote %s", path)


class DocxConverter:
    """Converts a .docx file to Markdown through mammoth's HTML output."""

    def __init__(self, heading_style: str = 'ATX', bullets: str = '-'):
        self.heading_style = heading_style
        self.bullets = bullets

    def to_markdown(self, html: str) -> str:
        """Convert HTML to trimmed Markdown."""
        text = markdownify(html, heading_style=self.heading_style, bullets=self.bullets)
        # Collapse the runs of blank lines markdownify leaves between blocks;
        # fenced code keeps its own blank lines
        parts = FENCE_PATTERN.split(text)
        text = ''.join(
            part if index % 2 else re.sub(r'\n{3,}', '\n\n', part)
            for index, part in enumerate(parts)
        )
        return text.strip()

    def convert(self, path: Path) -> str:
        path = Path(path)
        with open(path, 'rb') as docx_file:
            try:
                result = mammoth.convert_to_html(docx_file)
                text = self.to_markdown(result.value or '')
            except Exception as e:
                raise ConversionError(path, e) from e

        for message in result.messages:
            logger.warning("[%s] %s: %s", message.type, path.name, message.message)
        return text


class SiteBuilder:
    """Groups converted documents by chapter and writes the docsify site."""

    def __init__(self, docs_dir: Path, converter: Optional[DocxConverter] = None, title: str = SITE_TITLE):
        self.docs_dir = Path(docs_dir)
        self.converter = converter or DocxConverter()
        self.title = title
        self.chapters: Dict[str, Dict] = {}

    def add_problem(self, info: Classification):
        if info.chapter not in self.chapters:
            self.chapters[info.chapter] = {
                'name': info.chapter,
                'num': info.chapter_num,
                'problems': [],
            }
        self.chapters[info.chapter]['problems'].append({
            'name': info.problem,
            'num': info.problem_num,
        })

    def sorted_chapters(self) -> List[Dict]:
        """Chapters by number, each with its problems sorted by number."""
        chapters = sorted(self.chapters.values(), key=lambda c: c['num'])
        return [
            dict(chapter, problems=sorted(chapter['problems'], key=lambda p: p['num']))
            for chapter in chapters
        ]

    def convert_file(self, source: Path) -> Classification:
        """Convert one document into <chapter>/<problem>.md and record it."""
        info = parse_filename(source.name)
        if info.chapter in RESERVED_DIRS:
            raise ValueError(f"{source.name}: chapter name {info.chapter!r} would leave the site directory")
        body = self.converter.convert(source)
        target = self.docs_dir / info.chapter / f'{info.problem}.md'
        write_text(target, f'# {info.chapter} · {info.problem}\n\n{body}\n')
        self.add_problem(info)
        return info

    def _problem_link(self, chapter: Dict, problem: Dict) -> str:
        return f"[{problem['name']}](/{encode_uri(chapter['name'])}/{encode_uri(problem['name'])}.md)"

    def write_navigation(self) -> List[Dict]:
        """Write README.md, every chapter README.md and _sidebar.md."""
        chapters = self.sorted_chapters()

        chapter_list = '\n'.join(
            f"- [{c['name']}](/{encode_uri(c['name'])}/README.md)" for c in chapters
        )
        readme = (
            f"# {self.title}\n\n"
            "> 本站点由 Docx 自动转换生成，左侧为章节导航。\n\n"
            "## 章节\n\n"
            f"{chapter_list or '- 暂无内容'}\n"
        )
        write_text(self.docs_dir / 'README.md', readme)

        sidebar = ['- [总览](/README.md)\n']
        for chapter in chapters:
            sidebar.append(f"- {chapter['name']}\n")
            links = [self._problem_link(chapter, p) for p in chapter['problems']]
            index = '\n'.join(f'- {link}' for link in links)
            write_text(
                self.docs_dir / chapter['name'] / 'README.md',
                f"# {chapter['name']}\n\n{index or '- 暂无题目'}\n",
            )
            sidebar.extend(f'  - {link}\n' for link in links)

        write_text(self.docs_dir / '_sidebar.md', ''.join(sidebar))
        return chapters

    def build(self, input_dir: Path) -> List[Path]:
        """Convert every document in input_dir and regenerate navigation.

        Returns the converted source files. The first failing document
        aborts the run; pages written before it are left in place.
        """
        self.chapters = {}
        self.docs_dir.mkdir(parents=True, exist_ok=True)

        sources = find_documents(input_dir)
        for source in sources:
            logger.info("Converting %s", source.name)
            self.convert_file(source)

        self.write_navigation()
        return sources


def main(argv=None):
    parser = argparse.ArgumentParser(description='Convert .docx study notes into a docsify Markdown site')
    parser.add_argument('input', nargs='?', default='.', help='Directory holding the .docx files (default: current directory)')
    parser.add_argument('-o', '--output', help='Site output directory (default: <input>/docs)')
    parser.add_argument('--title', default=SITE_TITLE, help=f'Heading of the top-level README (default: {SITE_TITLE})')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    input_path = Path(args.input)
    if not input_path.is_dir():
        print(f"Error: {input_path} is not a valid directory")
        sys.exit(1)

    output_path = Path(args.output) if args.output else input_path / 'docs'
    builder = SiteBuilder(output_path, title=args.title)

    try:
        sources = builder.build(input_path)
    except Exception as e:
        print(f'转换过程中出现错误: {e}', file=sys.stderr)
        sys.exit(1)

    if not sources:
        print(f'未找到 .docx 文件，请将题目文件放在 {input_path} 目录。')
    else:
        print(f'已转换 {len(sources)} 个文件，内容位于 {output_path} 目录。')


if __name__ == '__main__':
    main()
