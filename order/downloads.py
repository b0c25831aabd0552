"""
Token gated downloads of purchased files.

A download request carries the order's download token and either an
authenticated user (who must own the order) or the customer email used at
checkout. The archive is rebuilt on every request into an anonymous temporary
file, which disappears as soon as the response closes it.
"""
import logging
import shutil
import tempfile
import zipfile

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import storages
from django.utils.crypto import constant_time_compare
from rest_framework.exceptions import APIException

from .exceptions import (
    ArchiveCreationFailed,
    EmailVerificationRequired,
    InvalidDownloadToken,
    NoFilesFound,
    OrderAccessDenied,
    OrderNotCompleted,
)

logger = logging.getLogger(__name__)


def product_storage():
    return storages[settings.PRODUCT_FILES_STORAGE]


def authorize_download(order, token, email=None, user=None):
    """Raise the first failing check, checks run in a fixed order."""
    try:
        _check_download_access(order, token, email, user)
    except APIException as exc:
        logger.warning("Download rejected for order %s: %s", order.id, exc.default_code)
        raise


def _check_download_access(order, token, email, user):
    if not token or not order.download_token or not constant_time_compare(token, order.download_token):
        raise InvalidDownloadToken()

    if not order.is_completed():
        raise OrderNotCompleted()

    if user is not None and user.is_authenticated:
        if order.user_id != user.id:
            raise OrderAccessDenied()
    elif not email or email != order.customer_email:
        raise EmailVerificationRequired()


def _file_exists(storage, path):
    # a path escaping the storage root counts as missing
    if not path:
        return False
    try:
        return storage.exists(path)
    except SuspiciousFileOperation:
        return False


def _unique_name(name, used):
    if name not in used:
        return name
    stem, dot, ext = name.rpartition(".")
    i = 2
    while f"{stem} ({i}){dot}{ext}" in used:
        i += 1
    return f"{stem} ({i}){dot}{ext}"


def build_order_archive(order, storage=None):
    """
    Zip every purchased file that exists in the product storage.

    Returns ``(archive, files_added)`` with the archive rewound to the start.
    Missing files are skipped; if none are left NoFilesFound is raised.
    """
    storage = storage if storage is not None else product_storage()
    archive = tempfile.TemporaryFile(suffix=".zip")

    added = 0
    skipped = 0
    used_names = set()
    try:
        with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for item in order.items.select_related("product"):
                product = item.product
                if not _file_exists(storage, product.file_path):
                    skipped += 1
                    logger.warning(
                        "Order %s: file for product %s missing (%s)", order.id, product.id, product.file_path
                    )
                    continue

                name = _unique_name(product.download_name, used_names)
                used_names.add(name)
                with storage.open(product.file_path, "rb") as src, zf.open(name, "w") as dest:
                    shutil.copyfileobj(src, dest)
                added += 1
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, SuspiciousFileOperation) as exc:
        archive.close()
        logger.exception("Order %s: could not build download archive", order.id)
        raise ArchiveCreationFailed() from exc

    if added == 0:
        archive.close()
        raise NoFilesFound()

    logger.info("Order %s: archive built with %s file(s), %s skipped", order.id, added, skipped)
    archive.seek(0)
    return archive, added
