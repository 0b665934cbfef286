"""
R1CS 선택/룩업 가젯 탐색기 — Flask 앱
=======================================

TinyDB 저장소 경로는 환경 변수 ZKP_SELECT_DB 로 지정한다.
지정하지 않으면 메모리 저장소를 쓴다.

실행:
    $ ZKP_SELECT_DB=db.json python app.py
"""

import logging
import os

from flask import Flask, jsonify, redirect, url_for

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from select_routes import select_bp, init_select_bp

DB_PATH = os.environ.get("ZKP_SELECT_DB")

if DB_PATH:
    DB = TinyDB(DB_PATH)                   #Storage DB
else:
    DB = TinyDB(storage=MemoryStorage)     #Memory DB

app = Flask(__name__)
app.secret_key = os.environ.get("ZKP_SELECT_SECRET", "key")

select_db = DB.table("select")
init_select_bp(select_db)
app.register_blueprint(select_bp)


@app.route("/")
def main():
    """사용 가능한 엔드포인트 목록."""
    return jsonify({
        "circuit": url_for("select.circuit_page"),
        "index": url_for("select.select_index"),
        "lookup2": url_for("select.select_lookup2"),
        "lookup3": url_for("select.select_lookup3"),
        "clear": url_for("select.select_clear"),
    })


@app.route("/reset", methods=["POST"])
def reset():
    select_db.truncate()
    return redirect(url_for("main"))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    app.run(debug=True)
