import os

from baroform import app, db


def init_db():
    with app.app_context():
        db.create_all()  # 테이블이 없을 때만 생성(데이터는 보존)


if __name__ == '__main__':
    init_db()
    port = int(os.getenv('PORT', 10000))
    app.run(host='0.0.0.0', port=port, debug=False)
