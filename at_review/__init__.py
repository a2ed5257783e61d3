"""
at_review: 테스트 플랜 소스 데이터 → 리뷰 문서 빌드.

Layers:
- domain/   : 에러, 스키마, 상수
- core/     : 레지스트리, applicability, assertion 병합, 명령 조회, 레코드 조립
- services/ : 테스트 플랜 로드, 패턴 리포트, 빌드 오케스트레이션
- render/   : Jinja2 리뷰 문서 렌더링
"""

__version__ = "0.1.0"
