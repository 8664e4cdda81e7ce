from flask import current_app
from werkzeug.utils import secure_filename
import os
import uuid

def resolve_image_path(filename):
    """Locate an image by name: user documents first, then bundled assets.

    Returns the absolute path, or None when the file exists in neither place.
    """
    if not filename:
        return None
    filename = secure_filename(filename)
    if not filename:
        return None
    for directory in (current_app.config['DOCUMENTS_DIR'], current_app.config['BUNDLED_ASSETS_DIR']):
        path = os.path.join(directory, filename)
        if os.path.isfile(path):
            return path
    return None

def save_image(file):
    """Store an uploaded image in the documents directory and return its filename"""
    filename = secure_filename(file.filename or '')
    ext = os.path.splitext(filename)[1].lower() or '.jpg'
    filename = f"{uuid.uuid4().hex}{ext}"
    directory = current_app.config['DOCUMENTS_DIR']
    os.makedirs(directory, exist_ok=True)
    file.save(os.path.join(directory, filename))
    return filename
