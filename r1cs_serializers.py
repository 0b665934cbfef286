"""
R1CS 데이터 직렬화/역직렬화 헬퍼
==================================

TinyDB에 저장 가능한 형태로 R1CS 객체를 변환한다.
FR, 선형결합, 제약 리스트, (r, A, B, C) 행렬.
"""

from zkp.r1cs.field import FR
from zkp.r1cs.linear_combination import ONE


# ─── FR ───

def serialize_fr(val):
    """FR → str(int). None 은 그대로."""
    if val is None:
        return None
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


def serialize_fr_list(vals):
    if vals is None:
        return None
    return [serialize_fr(v) for v in vals]


def deserialize_fr_list(data):
    """정수 또는 문자열 리스트 → FR 리스트. 쉼표 구분 문자열도 받는다."""
    if isinstance(data, str):
        data = [s for s in data.replace(" ", "").split(",") if s]
    return [FR(int(s)) for s in data]


# ─── 선형결합 / 제약 ───

def serialize_lc(lc):
    """LinearCombination → {"one" | "w{i}": str(coeff)}"""
    out = {}
    for var in lc.variables():
        key = "one" if var == ONE else f"w{var.index}"
        out[key] = serialize_fr(lc.terms[var])
    return out


def serialize_constraints(cs):
    """제약 테이블: [{"index", "label", "a", "b", "c"}, ...]"""
    table = []
    for i, constraint in enumerate(cs.constraints):
        table.append({
            "index": i,
            "label": constraint.label,
            "a": serialize_lc(constraint.a),
            "b": serialize_lc(constraint.b),
            "c": serialize_lc(constraint.c),
        })
    return table


def serialize_matrices(cs):
    """(r, A, B, C) → {"r": [...], "A": [[...]], ...}. 행렬 원소는 str(int)."""
    r, A, B, C = cs.to_matrices()

    def matrix(rows):
        return [[str(v) for v in row] for row in rows]

    return {
        "r": serialize_fr_list(r),
        "A": matrix(A),
        "B": matrix(B),
        "C": matrix(C),
    }
