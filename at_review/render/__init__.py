"""
Render layer: HTML 리뷰 문서 생성.

역할:
- 템플릿 + PatternReport → review/<pattern>.html, index.html
- Jinja2 (autoescape), 원자적 쓰기, 출력 디렉토리 락
"""

from .review import ReviewRenderer, output_lock

__all__ = [
    "ReviewRenderer",
    "output_lock",
]
