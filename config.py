# config.py
"""
프로젝트 전체에서 공통으로 쓰는
 - 환경 변수 (.env) 로딩
 - 서버·SMTP·클라이언트 상수 정의
SMTP 계정 정보는 환경 변수가 아니라 요청 본문으로 전달된다.
"""

import os
from dotenv import load_dotenv

# 로컬 개발 시 .env 파일 로드
load_dotenv()

SERVICE_NAME: str = "SMTP Webhook Service"
SERVICE_VERSION: str = "1.0.0"

# --- 웹훅 서버 관련 ---
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", 3000)) # 기본값 3000
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- SMTP (이메일 발송) 관련 ---
SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", 10)) # 기본값 10초

# --- 웹훅 클라이언트 관련 ---
WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", f"http://localhost:{PORT}/webhook")
WEBHOOK_TIMEOUT: float = float(os.getenv("WEBHOOK_TIMEOUT", 30))
