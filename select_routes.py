"""
Selection Flask Blueprint — 선택/룩업 가젯 탐색 엔드포인트
==========================================================

사용자가 입력한 셀렉터 비트와 후보 값으로 회로를 구성하고,
생성된 R1CS 제약과 (r, A, B, C) 행렬을 TinyDB에 저장한다.

  GET  /select/circuit   저장된 결과 (JSON)
  POST /select/index     다중 선택 (bits: MSB 우선, values, method)
  POST /select/lookup2   2비트 룩업 (bits: LSB 우선, constants)
  POST /select/lookup3   3비트 조건부 부호 반전 룩업
  POST /select/clear     저장된 결과 삭제
"""

import logging

from flask import Blueprint, jsonify, redirect, url_for, request
from tinydb import Query

from zkp.r1cs.constraint_system import ConstraintSystem
from zkp.r1cs.boolean import Boolean
from zkp.r1cs.fp_var import FpVar
from zkp.r1cs.select import (
    check_power_of_two_vector_args,
    check_two_bit_lookup_args,
    check_three_bit_lookup_args,
    repeated_selection,
    select_by_index,
    sum_of_conditions,
    two_bit_lookup,
    three_bit_cond_neg_lookup,
)

from r1cs_serializers import (
    serialize_fr,
    serialize_fr_list,
    deserialize_fr_list,
    serialize_constraints,
    serialize_matrices,
)

logger = logging.getLogger(__name__)

select_bp = Blueprint('select', __name__, url_prefix='/select')

DATA = Query()

# DB는 app.py에서 주입
DB = None

SELECTION_METHODS = {
    "repeated": select_by_index,
    "tree": repeated_selection,
    "sum_of_conditions": sum_of_conditions,
}


def init_select_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


# ─── 입력 파싱 ───

def parse_bits(text):
    """"101" → [True, False, True]. 0/1 이외의 문자는 ValueError."""
    text = text.strip()
    if any(ch not in "01" for ch in text):
        raise ValueError(f"비트 문자열은 0과 1로만 이루어져야 합니다: {text!r}")
    return [ch == "1" for ch in text]


def circuit_summary(cs, result):
    """회로 구성 결과를 TinyDB 저장용 dict 로 만든다."""
    return {
        "num_constraints": cs.num_constraints,
        "num_instance_variables": cs.num_instance_variables,
        "num_witness_variables": cs.num_witness_variables,
        "satisfied": cs.is_satisfied(),
        "constraints": serialize_constraints(cs),
        "matrices": serialize_matrices(cs),
        "result": serialize_fr(result.value()),
    }


def bad_request(error):
    logger.info("rejected selection input: %s", error)
    return jsonify({"error": str(error)}), 400


# ──────────────────────────────────────────────────────────────
# 엔드포인트
# ──────────────────────────────────────────────────────────────

@select_bp.route("/circuit")
def circuit_page():
    """저장된 선택/룩업 결과를 반환한다."""
    return jsonify({
        "index": db_get("select.index"),
        "lookup2": db_get("select.lookup2"),
        "lookup3": db_get("select.lookup3"),
    })


@select_bp.route("/index", methods=["POST"])
def select_index():
    """다중 선택 회로를 구성한다.

    form:
        bits: MSB 우선 비트 문자열 (예: "110" → 6)
        values: 쉼표로 구분한 후보 값 (2^len(bits) 개)
        method: repeated (기본) | tree | sum_of_conditions
    """
    method = request.form.get("method", "repeated")
    try:
        bits = parse_bits(request.form.get("bits", ""))
        values = deserialize_fr_list(request.form.get("values", ""))
        if method not in SELECTION_METHODS:
            raise ValueError(f"알 수 없는 선택 방식입니다: {method}")
        check_power_of_two_vector_args(bits, values)
    except ValueError as e:
        return bad_request(e)

    cs = ConstraintSystem()
    position = [Boolean.new_witness(cs, lambda b=b: b) for b in bits]
    candidates = [FpVar.new_witness(cs, lambda v=v: v) for v in values]
    before = cs.num_constraints
    result = SELECTION_METHODS[method](position, candidates)

    index = int("".join("1" if b else "0" for b in bits) or "0", 2)
    summary = circuit_summary(cs, result)
    summary.update({
        "method": method,
        "bits": request.form.get("bits", "").strip(),
        "values": serialize_fr_list(values),
        "index": index,
        "selection_constraints": cs.num_constraints - before,
    })
    db_set("select.index", summary)
    return redirect(url_for("select.circuit_page"))


@select_bp.route("/lookup2", methods=["POST"])
def select_lookup2():
    """2비트 룩업 회로를 구성한다.

    form:
        bits: LSB 우선 비트 문자열 (예: "01" → b = 0 + 2·1 = 2)
        constants: 쉼표로 구분한 상수 4개
    """
    try:
        bits = parse_bits(request.form.get("bits", ""))
        constants = deserialize_fr_list(request.form.get("constants", ""))
        check_two_bit_lookup_args(bits, constants)
    except ValueError as e:
        return bad_request(e)

    cs = ConstraintSystem()
    wires = [Boolean.new_witness(cs, lambda b=b: b) for b in bits]
    before = cs.num_constraints
    result = two_bit_lookup(wires, constants)

    summary = circuit_summary(cs, result)
    summary.update({
        "bits": request.form.get("bits", "").strip(),
        "constants": serialize_fr_list(constants),
        "lookup_constraints": cs.num_constraints - before,
    })
    db_set("select.lookup2", summary)
    return redirect(url_for("select.circuit_page"))


@select_bp.route("/lookup3", methods=["POST"])
def select_lookup3():
    """3비트 조건부 부호 반전 룩업 회로를 구성한다.

    form:
        bits: LSB 우선 비트 문자열, 세 번째 비트가 부호 (예: "101" → −c₁)
        constants: 쉼표로 구분한 상수 4개
    """
    try:
        bits = parse_bits(request.form.get("bits", ""))
        constants = deserialize_fr_list(request.form.get("constants", ""))
        check_three_bit_lookup_args(bits, constants)
    except ValueError as e:
        return bad_request(e)

    cs = ConstraintSystem()
    wires = [Boolean.new_witness(cs, lambda b=b: b) for b in bits]
    before = cs.num_constraints
    result = three_bit_cond_neg_lookup(wires, constants)

    summary = circuit_summary(cs, result)
    summary.update({
        "bits": request.form.get("bits", "").strip(),
        "constants": serialize_fr_list(constants),
        "lookup_constraints": cs.num_constraints - before,
    })
    db_set("select.lookup3", summary)
    return redirect(url_for("select.circuit_page"))


@select_bp.route("/clear", methods=["POST"])
def select_clear():
    """모든 선택 데이터를 클리어한다."""
    db_remove_prefix("select.")
    return redirect(url_for("select.circuit_page"))
