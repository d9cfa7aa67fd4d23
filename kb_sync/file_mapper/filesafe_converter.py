"""Filesafe filename conversion for article titles.

Titles keep their spelling and spaces. Only characters that are invalid on
common file systems are replaced.
"""

import re


class FilesafeConverter:
    """Converts article titles to filenames and directory names.

    Conversion rules:
    - Each of / \\ < > : " | ? * becomes an underscore
    - Everything else, case and spaces included, is kept

    Examples:
        - "Getting Started" → "Getting Started.md"
        - "API: v2" → "API_ v2.md"
        - "a/b" → "a_b.md"
    """

    UNSAFE_CHARS = re.compile(r'[/\\<>:"|?*]')

    # Path segments that refer to the current or parent directory
    RESERVED_NAMES = frozenset({'.', '..'})

    @classmethod
    def sanitize(cls, title: str) -> str:
        """Replace filesystem-unsafe characters in a title.

        >>> FilesafeConverter.sanitize('What? "Why"')
        'What_ _Why_'
        """
        return cls.UNSAFE_CHARS.sub('_', title)

    @classmethod
    def title_to_dirname(cls, title: str, fallback: str) -> str:
        """Convert an article title to a single path segment.

        Titles that sanitize to blank, ``.`` or ``..`` would not name a
        directory of their own, so ``fallback`` (the article ID) is used.

        >>> FilesafeConverter.title_to_dirname("..", "1-7")
        '1-7'
        """
        name = cls.sanitize(title)
        if not name.strip() or name in cls.RESERVED_NAMES:
            return fallback
        return name

    @classmethod
    def title_to_filename(cls, title: str, fallback: str) -> str:
        """Convert an article title to its markdown filename.

        >>> FilesafeConverter.title_to_filename("Intro", "1-1")
        'Intro.md'
        """
        return f"{cls.title_to_dirname(title, fallback)}.md"
