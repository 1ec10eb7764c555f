"""FTP 파일 전송 유틸리티 — 리뷰 이미지 원격 저장.

FTP file transfer utility for storing review images on the remote file store.
Connections are opened per call and always released through ``ftp_session``.

Usage:
    with ftp_session() as client:
        client.upload("/Project/PickMyMenu/Review/abc.jpg", local_path)
"""

import ftplib
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from app.config import settings

logger = logging.getLogger(__name__)


class FtpClient:
    """원격 파일 저장소 FTP 클라이언트.

    Thin wrapper over ``ftplib.FTP`` with connect/upload/disconnect steps.
    Methods are blocking; async callers run them in the thread pool.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.host: str = host if host is not None else settings.FTP_HOST
        self.port: int = port if port is not None else settings.FTP_PORT
        self.user: str = user if user is not None else settings.FTP_USER
        self.password: str = password if password is not None else settings.FTP_PASSWORD
        self.timeout: float = timeout if timeout is not None else settings.FTP_TIMEOUT
        self._ftp: ftplib.FTP | None = None

    def connect(self) -> None:
        """FTP 서버에 연결하고 로그인합니다 (Connect and log in, binary mode)."""
        ftp = ftplib.FTP()
        ftp.connect(self.host, self.port, timeout=self.timeout)
        try:
            ftp.login(self.user, self.password)
        except ftplib.all_errors:
            ftp.close()
            raise
        self._ftp = ftp
        logger.debug("FTP connected to %s:%s", self.host, self.port)

    def upload(self, remote_path: str, local_file: Path) -> None:
        """로컬 파일을 원격 경로에 저장합니다.

        Store a local file at ``remote_path`` (STOR, binary).

        Raises:
            RuntimeError: 연결되지 않은 상태 (Not connected)
            ftplib.Error | OSError: 전송 실패 (Transfer failure)
        """
        if self._ftp is None:
            raise RuntimeError("FTP client is not connected")
        with open(local_file, "rb") as fp:
            self._ftp.storbinary(f"STOR {remote_path}", fp)
        logger.info("Uploaded %s to ftp://%s%s", local_file.name, self.host, remote_path)

    def disconnect(self) -> None:
        """연결을 종료합니다. 이미 끊긴 경우 아무것도 하지 않습니다.

        Close the connection; a no-op when not connected. QUIT failures
        fall back to closing the socket.
        """
        if self._ftp is None:
            return
        ftp, self._ftp = self._ftp, None
        try:
            ftp.quit()
        except ftplib.all_errors:
            ftp.close()
        logger.debug("FTP disconnected from %s", self.host)


@contextmanager
def ftp_session(client: FtpClient | None = None) -> Iterator[FtpClient]:
    """연결을 열고 종료 경로와 무관하게 반드시 닫는 스코프.

    Open an FTP connection and guarantee it is closed on every exit path.
    """
    ftp_client: FtpClient = client or FtpClient()
    ftp_client.connect()
    try:
        yield ftp_client
    finally:
        ftp_client.disconnect()
