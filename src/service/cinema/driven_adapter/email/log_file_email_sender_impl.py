from datetime import datetime

import anyio

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_email_sender import IEmailSender


SEPARATOR = '=' * 40


class LogFileEmailSenderImpl(IEmailSender):
    """Appends outgoing mail to a text file instead of delivering it."""

    def __init__(self, *, log_file: str | None = None) -> None:
        self.log_file = anyio.Path(log_file or settings.EMAIL_LOG_FILE)

    @Logger.io
    async def send(self, *, to: str, subject: str, body: str) -> None:
        await self.log_file.parent.mkdir(parents=True, exist_ok=True)
        entry = (
            f'\n{SEPARATOR}\n'
            f'Date: {datetime.now():%Y-%m-%d %H:%M:%S}\n'
            f'From: {settings.SITE_EMAIL}\n'
            f'To: {to}\n'
            f'Subject: {subject}\n'
            f'Body:\n{body}\n'
            f'{SEPARATOR}\n'
        )
        async with await anyio.open_file(self.log_file, 'a', encoding='utf-8') as f:
            await f.write(entry)
        Logger.base.info(f'📧 [Email] "{subject}" to {to} written to {self.log_file}')
