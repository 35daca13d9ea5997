#!/usr/bin/env python3
"""
Tests for Chinese numeral decoding and filename classification.
"""

import unittest

from convert import (
    CHAPTER_TITLES,
    Classification,
    UNCLASSIFIED,
    chinese_to_number,
    parse_filename,
)

DIGITS = '零一二三四五六七八九'


class TestChineseToNumber(unittest.TestCase):
    """Test numeral decoding below one hundred."""

    def test_single_digits(self):
        """Test 零 through 九."""
        for value, digit in enumerate(DIGITS):
            self.assertEqual(chinese_to_number(digit), value, digit)

    def test_tens_and_units(self):
        """Every tens-and-units composition from 十 to 九十九."""
        for tens in range(1, 10):
            for units in range(10):
                prefix = '' if tens == 1 else DIGITS[tens]
                suffix = '' if units == 0 else DIGITS[units]
                text = f'{prefix}十{suffix}'
                self.assertEqual(chinese_to_number(text), tens * 10 + units, text)

    def test_explicit_one_ten(self):
        """Test 一十 as an explicit tens prefix."""
        self.assertEqual(chinese_to_number('一十二'), 12)

    def test_unsupported_numerals_are_zero(self):
        """Test that hundreds and unknown numerals decode to 0."""
        for text in ['', '一百', '一百二十', '两', '十两', '百', 'abc', '3']:
            self.assertEqual(chinese_to_number(text), 0, text)


class TestParseFilename(unittest.TestCase):
    """Test chapter/problem classification of file names."""

    def test_titled_chapter(self):
        """Test a chapter that has a title in the table."""
        info = parse_filename('第一章 第一题.docx')
        self.assertEqual(info, Classification('第一章：基础知识', '第一题', 1, 1))

    def test_all_titled_chapters(self):
        """Test the title suffix for chapters one to five."""
        for num, title in CHAPTER_TITLES.items():
            name = f'第{DIGITS[num]}章 第二题.docx'
            info = parse_filename(name)
            self.assertEqual(info.chapter, f'第{DIGITS[num]}章：{title}')
            self.assertEqual(info.chapter_num, num)
            self.assertEqual(info.problem_num, 2)

    def test_untitled_chapter(self):
        """Test a numbered chapter without a title."""
        info = parse_filename('第六章 第一题.docx')
        self.assertEqual(info.chapter, '第六章')
        self.assertEqual(info.chapter_num, 6)
        self.assertEqual(info.problem, '第一题')
        self.assertEqual(info.problem_num, 1)

    def test_single_token_is_unclassified(self):
        """Test a file name without a problem token."""
        info = parse_filename('杂项.docx')
        self.assertEqual(info, Classification(UNCLASSIFIED, '杂项', 0, 0))
        self.assertEqual(UNCLASSIFIED, '未分章')

    def test_extension_case_insensitive(self):
        """Test an upper-case extension."""
        info = parse_filename('第三章 第十二题.DOCX')
        self.assertEqual(info, Classification('第三章：动态规划', '第十二题', 3, 12))

    def test_non_standard_tokens_used_verbatim(self):
        """Test tokens that are not numbered chapters or problems."""
        info = parse_filename('附录 补充说明.docx')
        self.assertEqual(info, Classification('附录', '补充说明', 0, 0))

    def test_two_digit_chapter(self):
        """Test two-digit chapter and problem numbers."""
        info = parse_filename('第二十一章 第三十题.docx')
        self.assertEqual(info, Classification('第二十一章', '第三十题', 21, 30))

    def test_hundreds_fall_back_to_zero(self):
        """Test that numbers of one hundred or more sort as 0."""
        info = parse_filename('第一百章 第一百零一题.docx')
        self.assertEqual(info.chapter, '第一百章')
        self.assertEqual(info.chapter_num, 0)
        self.assertEqual(info.problem_num, 0)

    def test_extra_tokens_ignored(self):
        """Test that tokens after the problem are ignored."""
        info = parse_filename('第二章 第三题 草稿.docx')
        self.assertEqual(info.chapter, '第二章：分治策略')
        self.assertEqual(info.problem, '第三题')

    def test_tabs_and_repeated_spaces(self):
        """Test splitting on any whitespace."""
        info = parse_filename('第四章   \t第五题.docx')
        self.assertEqual(info, Classification('第四章：贪心法', '第五题', 4, 5))

    def test_pattern_must_match_whole_token(self):
        """Test that the patterns match whole tokens only."""
        info = parse_filename('第一章上 第一题下.docx')
        self.assertEqual(info, Classification('第一章上', '第一题下', 0, 0))

    def test_classification_is_immutable(self):
        """Test that a classification cannot be changed."""
        info = parse_filename('第一章 第一题.docx')
        with self.assertRaises(AttributeError):
            info.chapter = '第二章'


if __name__ == '__main__':
    unittest.main()
