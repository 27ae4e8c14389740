"""Human verification adapters."""

from xeoos.adapters.captcha.turnstile import AbstractCaptchaVerifier, TurnstileVerifier, create_captcha_verifier

__all__ = ["AbstractCaptchaVerifier", "TurnstileVerifier", "create_captcha_verifier"]
