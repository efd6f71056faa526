import os
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

UploadSource = Union[str, Path, bytes, bytearray, BinaryIO]


def get_file_name_with_ext(path: str) -> str:
    """
    Extracts file name with ext from a given path.

    :param path: Path to file.
    :type path: str
    :returns: File name with extension
    :rtype: :class:`str`
    :Usage example:

     .. code-block::

        from coreend.io.fs import get_file_name_with_ext

        file_name_ext = get_file_name_with_ext("/home/admin/uploads/avatar.png")

        print(file_name_ext)
        # Output: avatar.png
    """
    return os.path.basename(path)


def read_upload(file: UploadSource, file_name: Optional[str] = None) -> Tuple[str, bytes]:
    """
    Resolve an upload source into ``(file_name, content)``.

    ``file`` may be a path, raw bytes or an open binary file object. When
    ``file_name`` is omitted, the source's own name is used; raw bytes have no
    name so ``file_name`` is required for them.

    :raises ValueError: if no file name can be determined.
    """
    if isinstance(file, (bytes, bytearray)):
        content = bytes(file)
        own_name = None
    elif isinstance(file, (str, Path)):
        path = Path(file)
        content = path.read_bytes()
        own_name = path.name
    else:
        content = file.read()
        raw_name = getattr(file, "name", None)
        own_name = get_file_name_with_ext(raw_name) if isinstance(raw_name, str) else None

    name = file_name or own_name
    if not name:
        raise ValueError("file_name is required when the upload has no name of its own")
    return name, content
