"""
Avatar files on local disk under the uploads directory.
"""
import logging
import os
import shutil
import uuid
from typing import BinaryIO

from ..exceptions import StorageFailure

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def allowed_file(filename: str) -> bool:
    return (
        "." in filename
        and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS
    )


class AvatarStorage:
    def __init__(self, uploads_dir: str):
        self.uploads_dir = uploads_dir

    def path_for(self, filename: str) -> str:
        # stored names are generated here, never taken from the client
        return os.path.join(self.uploads_dir, os.path.basename(filename))

    def save(self, original_filename: str, stream: BinaryIO) -> str:
        """
        Write an uploaded file under a fresh random name.

        Returns:
            The stored filename (extension preserved, lower-cased)

        Raises:
            StorageFailure: If the file cannot be written
        """
        extension = original_filename.rsplit(".", 1)[1].lower()
        filename = f"{uuid.uuid4().hex}.{extension}"
        try:
            os.makedirs(self.uploads_dir, exist_ok=True)
            with open(self.path_for(filename), "wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            raise StorageFailure() from e
        logger.info("Avatar file stored: %s", filename)
        return filename

    def delete(self, filename: str) -> None:
        """
        Remove a stored file.

        A file that is already gone is logged and tolerated.

        Raises:
            StorageFailure: For any other file system error
        """
        try:
            os.remove(self.path_for(filename))
        except FileNotFoundError:
            logger.warning("Avatar file already missing: %s", filename)
            return
        except OSError as e:
            raise StorageFailure() from e
        logger.info("Avatar file deleted: %s", filename)
