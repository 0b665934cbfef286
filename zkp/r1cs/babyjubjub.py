"""
Baby Jubjub 곡선 (네이티브 연산)
=================================

bn128 스칼라 필드 FR 위에 정의된 twisted Edwards 곡선:

    A·x² + y² = 1 + D·x²·y²     (A = 168700, D = 168696)

회로 안에서 고정 기저 스칼라 곱을 할 때, 기저점의 배수들을 회로 밖에서
미리 계산해 상수 테이블로 만든다. 이 모듈은 그 테이블을 만드는 네이티브 연산을
제공한다.

**3비트 부호 윈도우**:
  윈도우 비트 (s₀, s₁, s₂) 에 대해 (1 + s₀ + 2·s₁) · (1 − 2·s₂) · P 를 더한다.
  −(x, y) = (−x, y) 이므로 테이블은 [P, 2P, 3P, 4P] 네 개면 충분하다.
  → three_bit_cond_neg_lookup 의 주 사용처

점은 (x, y) FR 튜플로 표현한다. 항등원은 (0, 1).

사용 예시:
    >>> table = signed_window_table(BASE8)
    >>> table[2] == point_mul(BASE8, 3)   # True
"""

from zkp.r1cs.field import FR, to_fr


# ─────────────────────────────────────────────────────────────────────
# 곡선 파라미터
# ─────────────────────────────────────────────────────────────────────

A = FR(168700)
D = FR(168696)

# 항등원
IDENTITY = (FR(0), FR(1))

# 소수 위수 부분군의 생성자 (circomlib Base8)
BASE8 = (
    FR(5299619240641551281634865583518297030282874472190772894086521144482721001553),
    FR(16950150798460657717958625567821834550301663161624707787222815936182638968203),
)


def to_point(point):
    """(int|FR, int|FR) 를 FR 튜플로 변환한다."""
    return (to_fr(point[0]), to_fr(point[1]))


def is_on_curve(point):
    """A·x² + y² == 1 + D·x²·y² 인지 확인한다."""
    x, y = to_point(point)
    xx = x * x
    yy = y * y
    return A * xx + yy == FR(1) + D * xx * yy


def point_add(p1, p2):
    """twisted Edwards 점 덧셈.

    x₃ = (x₁y₂ + y₁x₂) / (1 + D·x₁x₂y₁y₂)
    y₃ = (y₁y₂ − A·x₁x₂) / (1 − D·x₁x₂y₁y₂)
    """
    x1, y1 = to_point(p1)
    x2, y2 = to_point(p2)
    t = D * x1 * x2 * y1 * y2
    x3 = (x1 * y2 + y1 * x2) / (FR(1) + t)
    y3 = (y1 * y2 - A * x1 * x2) / (FR(1) - t)
    return (x3, y3)


def point_neg(point):
    """−(x, y) = (−x, y)."""
    x, y = to_point(point)
    return (-x, y)


def point_double(point):
    return point_add(point, point)


def point_mul(point, scalar):
    """double-and-add 스칼라 곱. 음수 스칼라는 부호 반전 후 곱한다."""
    if scalar < 0:
        return point_mul(point_neg(point), -scalar)
    result = IDENTITY
    addend = to_point(point)
    while scalar > 0:
        if scalar & 1:
            result = point_add(result, addend)
        addend = point_double(addend)
        scalar >>= 1
    return result


def signed_window_table(base):
    """3비트 부호 윈도우용 테이블 [P, 2P, 3P, 4P]."""
    table = [to_point(base)]
    for _ in range(3):
        table.append(point_add(table[-1], base))
    return table


def signed_window_value(bits):
    """윈도우 비트 (s₀, s₁, s₂) 가 나타내는 부호 있는 배수 (±1..±4)."""
    s0, s1, s2 = (int(bool(b)) for b in bits)
    magnitude = 1 + s0 + 2 * s1
    return -magnitude if s2 else magnitude
