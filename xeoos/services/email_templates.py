"""Transactional email rendering (HTML + plain text).

Every email shares the XEO OS header, a heading, a content card with an
optional code, an optional action button, an optional footer line and a
localized link to the email settings page.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

from xeoos.adapters.email.base import EmailMessage
from xeoos.core.config import settings
from xeoos.i18n.locales import lang, resolve_locale

EMAIL_SETTINGS_LABEL = {
    "en-US": "Email Settings",
    "zh-CN": "邮件设置",
    "zh-TW": "郵件設定",
    "es-ES": "Configuración de correo",
    "fr-FR": "Paramètres email",
    "ru-RU": "Настройки почты",
    "ja-JP": "メール設定",
    "de-DE": "E-Mail-Einstellungen",
    "pt-BR": "Configurações de email",
    "ko-KR": "이메일 설정",
}

VERIFICATION_TEXTS = {
    "en-US": {
        "subject": "XEO OS Verification Code",
        "text": "Your verification code is",
        "intro": "Welcome to XEO OS",
        "outro": "If you didn't request this, please ignore this email.",
    },
    "zh-CN": {
        "subject": "XEO OS 注册验证码",
        "text": "您的验证码是",
        "intro": "欢迎使用 XEO OS",
        "outro": "如果您没有请求验证码，请忽略此邮件。",
    },
    "zh-TW": {
        "subject": "XEO OS 註冊驗證碼",
        "text": "您的驗證碼是",
        "intro": "歡迎使用 XEO OS",
        "outro": "如果您未請求驗證碼，請忽略此郵件。",
    },
    "es-ES": {
        "subject": "Código de verificación de XEO OS",
        "text": "Tu código de verificación es",
        "intro": "Bienvenido a XEO OS",
        "outro": "Si no solicitaste esto, ignora este correo.",
    },
    "fr-FR": {
        "subject": "Code de vérification XEO OS",
        "text": "Votre code de vérification est",
        "intro": "Bienvenue sur XEO OS",
        "outro": "Si vous n'avez pas demandé cela, ignorez cet e-mail.",
    },
    "ru-RU": {
        "subject": "Код подтверждения XEO OS",
        "text": "Ваш код подтверждения",
        "intro": "Добро пожаловать в XEO OS",
        "outro": "Если вы не запрашивали это, просто проигнорируйте письмо.",
    },
    "ja-JP": {
        "subject": "XEO OS 認証コード",
        "text": "あなたの認証コードは",
        "intro": "XEO OS へようこそ",
        "outro": "このメールに心当たりがない場合は無視してください。",
    },
    "de-DE": {
        "subject": "XEO OS Bestätigungscode",
        "text": "Dein Bestätigungscode ist",
        "intro": "Willkommen bei XEO OS",
        "outro": "Wenn du das nicht angefordert hast, ignoriere diese E-Mail.",
    },
    "pt-BR": {
        "subject": "Código de verificação XEO OS",
        "text": "Seu código de verificação é",
        "intro": "Bem-vindo ao XEO OS",
        "outro": "Se você não solicitou isso, ignore este e-mail.",
    },
    "ko-KR": {
        "subject": "XEO OS 인증 코드",
        "text": "인증 코드는 다음과 같습니다",
        "intro": "XEO OS에 오신 것을 환영합니다",
        "outro": "요청하지 않았다면 이 이메일을 무시하세요.",
    },
}

RESET_TEXTS = {
    "en-US": {
        "subject": "XEO OS Password Reset Code",
        "text": "Your password reset code is",
        "intro": "Reset your XEO OS password",
        "outro": "If you didn't request this, please ignore this email. This code will expire in 15 minutes.",
    },
    "zh-CN": {
        "subject": "XEO OS 密码重置验证码",
        "text": "您的密码重置验证码是",
        "intro": "重置您的 XEO OS 密码",
        "outro": "如果您没有请求密码重置，请忽略此邮件。此验证码将在15分钟后过期。",
    },
    "zh-TW": {
        "subject": "XEO OS 密碼重置驗證碼",
        "text": "您的密碼重置驗證碼是",
        "intro": "重置您的 XEO OS 密碼",
        "outro": "如果您未請求密碼重置，請忽略此郵件。此驗證碼將在15分鐘後過期。",
    },
    "es-ES": {
        "subject": "Código de restablecimiento de contraseña XEO OS",
        "text": "Tu código de restablecimiento de contraseña es",
        "intro": "Restablecer tu contraseña de XEO OS",
        "outro": "Si no solicitaste esto, ignora este correo. Este código expirará en 15 minutos.",
    },
    "fr-FR": {
        "subject": "Code de réinitialisation de mot de passe XEO OS",
        "text": "Votre code de réinitialisation de mot de passe est",
        "intro": "Réinitialiser votre mot de passe XEO OS",
        "outro": "Si vous n'avez pas demandé cela, ignorez cet e-mail. Ce code expirera dans 15 minutes.",
    },
    "ru-RU": {
        "subject": "Код сброса пароля XEO OS",
        "text": "Ваш код сброса пароля",
        "intro": "Сброс пароля XEO OS",
        "outro": "Если вы не запрашивали это, просто проигнорируйте письмо. Код истечет через 15 минут.",
    },
    "ja-JP": {
        "subject": "XEO OS パスワードリセットコード",
        "text": "あなたのパスワードリセットコードは",
        "intro": "XEO OS パスワードをリセット",
        "outro": "このメールに心当たりがない場合は無視してください。このコードは15分後に期限切れになります。",
    },
    "de-DE": {
        "subject": "XEO OS Passwort-Reset-Code",
        "text": "Dein Passwort-Reset-Code ist",
        "intro": "XEO OS Passwort zurücksetzen",
        "outro": "Wenn du das nicht angefordert hast, ignoriere diese E-Mail. Dieser Code läuft in 15 Minuten ab.",
    },
    "pt-BR": {
        "subject": "Código de redefinição de senha XEO OS",
        "text": "Seu código de redefinição de senha é",
        "intro": "Redefinir sua senha XEO OS",
        "outro": "Se você não solicitou isso, ignore este e-mail. Este código expirará em 15 minutos.",
    },
    "ko-KR": {
        "subject": "XEO OS 비밀번호 재설정 코드",
        "text": "비밀번호 재설정 코드는 다음과 같습니다",
        "intro": "XEO OS 비밀번호 재설정",
        "outro": "요청하지 않았다면 이 이메일을 무시하세요. 이 코드는 15분 후 만료됩니다.",
    },
}

SENDER_ADDRESS = "noreply@xeoos.net"


@dataclass(frozen=True)
class ActionButton:
    text: str
    url: str


@dataclass(frozen=True)
class EmailTemplate:
    title: str
    heading: str
    content: str = ""
    footer: str | None = None
    action: ActionButton | None = None
    code: str | None = None


def _site() -> str:
    return settings.app.site_url.rstrip("/")


def render_html(data: EmailTemplate, locale: str) -> str:
    site = _site()
    settings_label = escape(lang(EMAIL_SETTINGS_LABEL, locale))

    content = ""
    if data.content:
        spacing = "margin:0 0 16px;" if data.code else ""
        content = (
            f'<div style="font-size:16px;color:#e6edf3;word-wrap:break-word;line-height:1.6;{spacing}">'
            f"{escape(data.content)}</div>"
        )
    code = ""
    if data.code:
        code = (
            '<div style="font-size:36px;font-weight:700;color:#f0b100;letter-spacing:6px;'
            f'margin:16px 0;text-align:center;">{escape(data.code)}</div>'
        )
    action = ""
    if data.action:
        action = (
            '<div style="margin:32px 0;">'
            f'<a href="{escape(data.action.url, quote=True)}" style="display:inline-block;'
            "background:linear-gradient(135deg, #f0b100 0%, #ffd700 100%);color:#0d1117;"
            'text-decoration:none;padding:14px 28px;border-radius:8px;font-weight:600;font-size:16px;">'
            f"{escape(data.action.text)}</a></div>"
        )
    footer = (
        f'<p style="font-size:14px;color:#7d8590;margin:16px 0;">{escape(data.footer)}</p>'
        if data.footer
        else ""
    )
    card_align = "text-align:left;" if data.action else ""

    return f"""<html>
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(data.title)}</title>
  </head>
  <body style="margin:0;padding:0;font-family:'Segoe UI',Arial,sans-serif;background-color:#0d1117;color:#e6edf3;line-height:1.6;">
    <table width="100%" cellpadding="0" cellspacing="0" style="background-color:#0d1117;padding:20px;">
      <tr><td align="center">
        <table style="max-width:600px;width:100%;background:#161b22;border-radius:16px;padding:40px;border:1px solid #30363d;">
          <tr><td style="text-align:center;">
            <div style="margin-bottom:32px;">
              <h1 style="margin:0;font-size:32px;font-weight:700;color:#f0b100;">XEO OS</h1>
              <p style="margin:8px 0 0;font-size:14px;color:#7d8590;font-weight:500;letter-spacing:0.5px;">Xchange Everyone's Option</p>
            </div>
            <div style="margin:32px 0;">
              <h2 style="font-size:22px;margin:0 0 20px;color:#e6edf3;font-weight:600;">{escape(data.heading)}</h2>
              <div style="background:#21262d;border:1px solid #30363d;border-radius:12px;padding:24px;margin:20px 0;{card_align}">
                {content}
                {code}
              </div>
            </div>
            {action}
            <div style="margin-top:48px;padding-top:24px;border-top:1px solid #30363d;">
              {footer}
              <p style="font-size:12px;color:#7d8590;margin:8px 0;">
                <span style="color:#6e7681;">{SENDER_ADDRESS}</span> ·
                <a href="{site}" style="color:#f0b100;text-decoration:none;font-weight:500;">{site.split("//")[-1]}</a>
              </p>
              <p style="font-size:12px;color:#7d8590;margin:8px 0;">
                <a href="{site}/setting" style="color:#7d8590;text-decoration:none;">{settings_label}</a>
              </p>
            </div>
          </td></tr>
        </table>
      </td></tr>
    </table>
  </body>
</html>
"""


def render_text(data: EmailTemplate, locale: str) -> str:
    site = _site()
    lines = ["XEO OS - Xchange Everyone's Option", "", data.heading, "=" * len(data.heading), ""]

    if data.content:
        lines += [data.content, ""]
    if data.code:
        lines += [data.code, ""]
    if data.action:
        lines += [f"{data.action.text}: {data.action.url}", ""]
    if data.footer:
        lines += [data.footer, ""]

    lines += [
        "---",
        f"{SENDER_ADDRESS} | {site.split('//')[-1]}",
        f"{lang(EMAIL_SETTINGS_LABEL, locale)}: {site}/setting",
    ]
    return "\n".join(lines) + "\n"


def render(data: EmailTemplate, locale: str | None) -> tuple[str, str]:
    """Return ``(html, text)`` bodies for ``data`` in ``locale``."""

    resolved = resolve_locale(locale)
    return render_html(data, resolved), render_text(data, resolved)


def _code_email(texts: dict[str, dict[str, str]], title: str, to: str, code: str, locale: str | None) -> EmailMessage:
    resolved = resolve_locale(locale)
    t = texts.get(resolved) or texts["en-US"]
    html, text = render(
        EmailTemplate(title=title, heading=t["intro"], content=t["text"], code=code, footer=t["outro"]),
        resolved,
    )
    return EmailMessage(to=to, subject=t["subject"], html=html, text=text)


def verification_email(to: str, code: str, locale: str | None) -> EmailMessage:
    return _code_email(VERIFICATION_TEXTS, "XEO OS Verification", to, code, locale)


def password_reset_email(to: str, code: str, locale: str | None) -> EmailMessage:
    return _code_email(RESET_TEXTS, "XEO OS Password Reset", to, code, locale)


def notification_email(to: str, *, title: str, content: str, link: str, button_text: str, locale: str | None) -> EmailMessage:
    html, text = render(
        EmailTemplate(
            title="XEO OS Notification",
            heading=title,
            content=content,
            action=ActionButton(text=button_text, url=link),
        ),
        locale,
    )
    return EmailMessage(to=to, subject=title, html=html, text=text)
