from flask_restx import Api, Resource, fields, marshal
from flask import request
from werkzeug.datastructures import FileStorage
import logging

from savefile.parser import SaveFileParser

logger = logging.getLogger('main')


def init_rest_api(app):
    api = Api(app, version='1.0', title='Pokemon Tracker API',
        description='Pokemon game progress tracker API',
        doc='/docs'
    )

    # Namespaces
    ns_savefile = api.namespace('v1/savefile', description='Save file operations')

    # Models
    analysis_model = api.model('SaveFileAnalysis', {
        'file': fields.String(description='Uploaded file name'),
        'size': fields.Integer(description='Size in bytes'),
        'format': fields.String(description='Hardware format guessed from the size'),
        'estimated_game': fields.String(description='Game family guessed from the content'),
        'badges': fields.Integer(description='Badges found'),
        'dex_completion': fields.Integer(description='Pokedex completion (0-100)'),
        'playtime_hours': fields.Integer(description='Play time in hours'),
        'degraded': fields.Boolean(description='Extraction fell back to default values'),
    })

    upload_parser = api.parser()
    upload_parser.add_argument('savefile', location='files', type=FileStorage, required=True)

    parser = SaveFileParser()

    # Namespace Save file
    @ns_savefile.route('/analyze')
    class SaveFileAnalyze(Resource):
        @ns_savefile.doc('analyze_savefile')
        @ns_savefile.expect(upload_parser)
        @ns_savefile.response(400, 'No file uploaded')
        def post(self):
            """Parse a save file without storing anything"""
            upload = request.files.get('savefile')
            if upload is None or not upload.filename:
                return {'error': True, 'code': 'VALIDATION_ERROR', 'message': 'No file uploaded'}, 400

            report = parser.parse(upload.read())
            data = report.to_dict()
            data['file'] = upload.filename
            logger.info(f"Save file analyzed: {upload.filename} ({report.detected_format.label})")
            return marshal(data, analysis_model)

    return api
