# security/passwords.py
import base64
import hashlib
import hmac
from typing import Optional

import bcrypt

# (알고리즘, 다이제스트 길이) -> hashlib 이름
# base64 로 인코딩한 결과가 bcrypt 입력 한도(72 bytes) 안에 들어가는 조합만 허용
DIGESTS = {
    ("sha2", 224): "sha224",
    ("sha2", 256): "sha256",
    ("sha2", 384): "sha384",
    ("sha3", 224): "sha3_224",
    ("sha3", 256): "sha3_256",
    ("sha3", 384): "sha3_384",
}


class PasswordHasher:
    """
    Two-stage password hash.

    1) keyed digest: HMAC(pepper, plaintext) with the configured SHA family/length
    2) adaptive hash: bcrypt over the base64 digest, cost = ``rounds``
    """

    def __init__(self, algorithm: str = "sha2", digest_length: int = 256,
                 rounds: int = 12, pepper: str = ""):
        key = (algorithm.lower(), digest_length)
        if key not in DIGESTS:
            raise ValueError(
                f"unsupported password digest {algorithm}/{digest_length}; "
                f"choose one of {sorted(DIGESTS)}"
            )
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.digest = DIGESTS[key]
        self.rounds = rounds
        self._pepper = pepper.encode("utf-8")
        self._dummy_hash: Optional[bytes] = None

    @classmethod
    def from_settings(cls, settings) -> "PasswordHasher":
        return cls(
            algorithm=settings.hash_algorithm,
            digest_length=settings.hash_digest_length,
            rounds=settings.bcrypt_rounds,
            pepper=settings.password_pepper,
        )

    def prehash(self, plain: str) -> bytes:
        mac = hmac.new(self._pepper, plain.encode("utf-8"), self.digest)
        return base64.b64encode(mac.digest())

    def hash_password(self, plain: str) -> str:
        return bcrypt.hashpw(self.prehash(plain), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify_password(self, plain: str, hashed: Optional[str]) -> bool:
        if hashed is None:
            # 없는 게시글도 비밀번호 불일치와 같은 비용을 치르게 한다
            bcrypt.checkpw(self.prehash(plain), self._dummy())
            return False
        return bcrypt.checkpw(self.prehash(plain), hashed.encode("utf-8"))

    def _dummy(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(self.rounds))
        return self._dummy_hash
