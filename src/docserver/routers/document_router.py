import logging
from typing import Optional

from flask import Blueprint, jsonify, request, current_app

from flattener.errors import ParseError

logger = logging.getLogger(__name__)

document_router = Blueprint('document_router', __name__)


# --- HELPER FUNCTIONS ---

def get_document_controller():
    """Retrieves the document controller from the Flask application context."""
    controller = current_app.config.get('DOCUMENT_CONTROLLER')
    if not controller:
        raise RuntimeError("DocumentController is not set in app.config['DOCUMENT_CONTROLLER']")
    return controller


def _get_id_param() -> Optional[int]:
    raw = request.args.get('id', '').strip()
    # isdigit alone accepts non-ASCII digits such as "²" that int() rejects
    return int(raw) if raw.isascii() and raw.isdigit() else None


# --- API ROUTES ---

@document_router.route('/document', methods=['GET'])
def get_document():
    """Returns a stored document, including its flattened elements, as JSON."""
    doc_id = _get_id_param()
    if doc_id is None:
        return jsonify({"error": "ID parameter is required"}), 400

    try:
        doc = get_document_controller().get_document(doc_id)
    except Exception as e:
        logger.error(f"Error fetching document {doc_id}: {e}", exc_info=True)
        return jsonify({"error": f"Failed to fetch document with ID {doc_id}: {e}"}), 500

    if doc is None:
        return jsonify({"error": f"Document with ID {doc_id} not found"}), 404
    return jsonify(doc.model_dump(mode='json'))


@document_router.route('/add', methods=['POST'])
def add_document():
    """Parses the raw request body and stores it as a new document."""
    raw = request.get_data(as_text=True)
    try:
        new_id = get_document_controller().add_document(raw)
    except ParseError as e:
        logger.info(f"Rejected document: {e}")
        return jsonify({"error": f"Failed to parse document: {e}"}), 400
    except Exception as e:
        logger.error(f"Error adding document: {e}", exc_info=True)
        return jsonify({"error": f"Failed to insert document into database: {e}"}), 500

    if new_id is None:
        return jsonify({"error": "Failed to insert document into database"}), 500
    return jsonify({"id": new_id}), 201


@document_router.route('/del', methods=['DELETE'])
def delete_document():
    doc_id = _get_id_param()
    if doc_id is None:
        return jsonify({"error": "ID parameter is required"}), 400

    try:
        deleted = get_document_controller().delete_document(doc_id)
    except Exception as e:
        logger.error(f"Error deleting document {doc_id}: {e}", exc_info=True)
        return jsonify({"error": f"Failed to delete document with ID {doc_id}: {e}"}), 500

    if not deleted:
        return jsonify({"error": f"Document with ID {doc_id} not found"}), 404
    return jsonify({"status": "deleted", "id": doc_id})


@document_router.route('/documents', methods=['GET'])
def list_documents():
    """Lists id and extracted fields of every stored document."""
    try:
        return jsonify(get_document_controller().list_documents())
    except Exception as e:
        logger.error(f"Error listing documents: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500
