"""Garmin Connect authentication helpers.

Wraps garminconnect / garth token management with a clean error hierarchy.
The daily job runs unattended, so a login that needs MFA either goes
through the supplied prompt callback or fails with ``GarminMFARequired``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from garminconnect import Garmin

from garmin_client.exceptions import GarminAuthError, GarminMFARequired

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_DIR = Path("~/.garminconnect").expanduser()
_TOKEN_FILE = "oauth1_token.json"
_MFA_MARKERS = ("mfa", "verification", "two-factor")


def has_saved_tokens(token_dir: Path | str = DEFAULT_TOKEN_DIR) -> bool:
    return (Path(token_dir) / _TOKEN_FILE).exists()


def create_session(
    email: str,
    password: str,
    token_dir: Path | str = DEFAULT_TOKEN_DIR,
    prompt_mfa: Optional[Callable[[], str]] = None,
) -> Garmin:
    """Authenticate with Garmin Connect and return a session.

    Saved tokens are tried first; if they are missing or rejected a fresh
    SSO login is made and the new tokens are saved.

    Parameters
    ----------
    email : str
        Garmin Connect account email.
    password : str
        Garmin Connect account password.
    token_dir : Path | str
        Directory where garth tokens are persisted.
    prompt_mfa : callable, optional
        Returns the MFA code when Garmin asks for one. Without it a login
        that needs MFA raises ``GarminMFARequired``.

    Returns
    -------
    Garmin
        Authenticated session.
    """
    token_dir = Path(token_dir)
    token_dir.mkdir(parents=True, exist_ok=True)
    tokenstore = str(token_dir)

    if has_saved_tokens(token_dir):
        try:
            client = Garmin(email=email, password=password)
            client.login(tokenstore=tokenstore)
            client.garth.dump(tokenstore)
            logger.info("Resumed Garmin session from %s", token_dir)
            return client
        except Exception as exc:
            logger.info("Saved Garmin tokens rejected (%s), trying SSO login", exc)

    return _sso_login(email, password, tokenstore, prompt_mfa)


def _sso_login(
    email: str,
    password: str,
    tokenstore: str,
    prompt_mfa: Optional[Callable[[], str]],
) -> Garmin:
    return_on_mfa = prompt_mfa is None
    try:
        client = Garmin(
            email=email,
            password=password,
            prompt_mfa=prompt_mfa,
            return_on_mfa=return_on_mfa,
        )
        result = client.login()
    except Exception as exc:
        message = str(exc).lower()
        if any(marker in message for marker in _MFA_MARKERS):
            raise GarminMFARequired(str(exc), token_dir=Path(tokenstore)) from exc
        raise GarminAuthError(f"Login failed: {exc}") from exc

    # With return_on_mfa the library hands back ("needs_mfa", state)
    if return_on_mfa and isinstance(result, tuple) and result and result[0] == "needs_mfa":
        raise GarminMFARequired(
            "MFA verification required; run once interactively", token_dir=Path(tokenstore)
        )

    client.garth.dump(tokenstore)
    logger.info("Logged in to Garmin via SSO, tokens saved to %s", tokenstore)
    return client


def resume_session(token_dir: Path | str = DEFAULT_TOKEN_DIR) -> Garmin:
    """Resume a session from saved tokens (no credentials needed).

    Raises ``GarminAuthError`` if tokens are missing or expired.
    """
    token_dir = Path(token_dir)
    if not has_saved_tokens(token_dir):
        raise GarminAuthError(f"No saved tokens at {token_dir}")

    try:
        client = Garmin()
        client.login(tokenstore=str(token_dir))
    except Exception as exc:
        raise GarminAuthError(f"Token resume failed: {exc}") from exc
    logger.debug("Resumed Garmin session from %s", token_dir)
    return client
