API_PREFIX = "/api/v1"

# Listing status wire values
STATUS_DRAFT = "DRAFT"
STATUS_PUBLISHED = "PUBLISHED"

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"

# Capabilities checked before a service call
LISTINGS_WRITE = "listings:write"
LISTINGS_READ_ALL = "listings:read-all"
CONSULTATIONS_READ = "consultations:read"
CONSULTATIONS_DELETE = "consultations:delete"
UPLOADS_CREATE = "uploads:create"

ROLE_CAPABILITIES = {
    ROLE_ADMIN: frozenset(
        {
            LISTINGS_WRITE,
            LISTINGS_READ_ALL,
            CONSULTATIONS_READ,
            CONSULTATIONS_DELETE,
            UPLOADS_CREATE,
        }
    ),
    ROLE_USER: frozenset(),
}

FEATURED_LIMIT = 3
# Monday; the "new this week" window starts at 00:00 local time on this day
WEEK_START_WEEKDAY = 0

VERIFICATION_TYPE_PHONE = "PHONE"
VERIFICATION_TTL_SECONDS = 180
SMS_TEMPLATE = "[스마트창업] 인증번호는 [{code}] 입니다."

UPLOAD_PREFIX = "listings"

KAKAO_AUTHORIZE_URL = "https://kauth.kakao.com/oauth/authorize"
KAKAO_TOKEN_URL = "https://kauth.kakao.com/oauth/token"
KAKAO_PROFILE_URL = "https://kapi.kakao.com/v2/user/me"
KAKAO_PROVIDER = "KAKAO"
KAKAO_DEFAULT_NAME = "카카오 사용자"

COOLSMS_SEND_URL = "https://api.coolsms.co.kr/messages/v4/send"

HTTP_TIMEOUT_SECONDS = 10

# Caller-facing messages
MESSAGES = {
    "liked": "매물을 찜했습니다.",
    "unliked": "매물 찜을 취소했습니다.",
    "listing_deleted": "매물이 성공적으로 삭제되었습니다.",
    "listing_not_found": "해당 매물을 찾을 수 없습니다.",
    "consultation_deleted": "상담 신청 내역이 삭제되었습니다.",
    "consultation_not_found": "해당 상담 신청을 찾을 수 없습니다.",
    "code_sent": "인증번호가 발송되었습니다.",
    "code_verified": "인증에 성공했습니다.",
    "code_invalid": "인증번호가 올바르지 않습니다.",
    "code_expired": "인증번호가 만료되었습니다.",
    "email_taken": "이미 사용 중인 이메일입니다.",
    "bad_credentials": "이메일 또는 비밀번호가 올바르지 않습니다.",
    "user_not_found": "사용자를 찾을 수 없습니다.",
    "token_required": "인증 토큰이 필요합니다!",
    "token_invalid": "유효하지 않은 토큰입니다.",
    "token_expired": "토큰이 만료되었습니다.",
    "forbidden": "접근 권한이 없습니다.",
    "validation": "입력값이 올바르지 않습니다.",
    "internal": "서버 내부 오류가 발생했습니다.",
    "upstream": "외부 서비스 호출에 실패했습니다.",
    "like_conflict": "동시에 처리 중인 요청이 있습니다. 다시 시도해주세요.",
    "feature_window": "노출 종료일은 노출 시작일보다 빠를 수 없습니다.",
    "social_login_conflict": "소셜 로그인 처리 중 충돌이 발생했습니다. 다시 시도해주세요.",
}
