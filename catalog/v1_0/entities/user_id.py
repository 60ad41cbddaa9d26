from dataclasses import dataclass

IDP_SEPARATOR = "~"
KNOWN_IDPS = frozenset({"oidc", "kubernetes"})
MAX_SUBJECT_LENGTH = 128


@dataclass(frozen=True, order=True, slots=True)
class UserId:
    """
    Identity-provider-qualified user identifier.

    The string form is ``"{idp}~{subject}"``, e.g. ``"oidc~1b4e28ba"``. It is
    what gets stored in ``users.id`` and embedded into pagination tokens.
    """
    idp: str
    subject: str

    def __post_init__(self) -> None:
        if self.idp not in KNOWN_IDPS:
            raise ValueError(f"Unknown identity provider: {self.idp!r}")
        if not self.subject:
            raise ValueError("User subject must not be empty")
        if len(self.subject) > MAX_SUBJECT_LENGTH:
            raise ValueError(
                f"User subject must be at most {MAX_SUBJECT_LENGTH} characters"
            )
        if any(ord(ch) < 32 or ord(ch) == 127 for ch in self.subject):
            raise ValueError("User subject must not contain control characters")

    @classmethod
    def parse(cls, value: str) -> "UserId":
        if not isinstance(value, str):
            raise ValueError(f"User id must be a string, got {type(value).__name__}")
        idp, sep, subject = value.partition(IDP_SEPARATOR)
        if not sep:
            raise ValueError(
                f"User id {value!r} is missing the identity provider prefix"
            )
        return cls(idp=idp, subject=subject)

    @classmethod
    def oidc(cls, subject: str) -> "UserId":
        return cls(idp="oidc", subject=subject)

    @classmethod
    def kubernetes(cls, subject: str) -> "UserId":
        return cls(idp="kubernetes", subject=subject)

    def __str__(self) -> str:
        return f"{self.idp}{IDP_SEPARATOR}{self.subject}"
