# ballotbox/routes.py

# HTTP routes for the election service. Every view is a thin adapter: parse
# and validate the body, resolve the bearer token, call one store operation,
# serialise the result. Error kinds raised by the store are mapped to status
# codes by ballotbox.errors.

from functools import wraps

from flask import Blueprint, current_app, g, jsonify, request, abort

from ballotbox.errors import AlreadyVoted, InvalidCredentials, UnknownCandidate
from ballotbox.security.input_validator import InputValidator
from ballotbox.security.token_manager import TokenManager

api = Blueprint('api', __name__)
validator = InputValidator()


def get_storage():
    return current_app.extensions['ballotbox']['storage']


def get_audit_logger():
    return current_app.extensions['ballotbox']['audit']


def token_required(view):
    """Resolve the Authorization header to a user and expose it as g.user."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        token = TokenManager.extract_from_header(request.headers.get('Authorization'))
        if token is None:
            abort(401, description='Authentication required')
        g.token = token
        g.user = get_storage().resolve_token(token)
        return view(*args, **kwargs)
    return wrapper


@api.route('/register/', methods=['POST'])
def register():
    data = validator.validate_registration(request.get_json(silent=True))
    user = get_storage().create_user(data['username'], data['email'], data['password'])
    get_audit_logger().log_event('user_registered', {'username': user.username}, user.id)
    return jsonify(user.to_dict()), 201


@api.route('/login/', methods=['POST'])
def login():
    data = validator.validate_login(request.get_json(silent=True))
    storage = get_storage()
    try:
        user = storage.authenticate(data['username'], data['password'])
    except InvalidCredentials:
        get_audit_logger().log_event('failed_login', {'username': data['username'], 'ip': request.remote_addr})
        raise
    token = storage.issue_token(user.id)
    get_audit_logger().log_event('successful_login', {'ip': request.remote_addr}, user.id)
    return jsonify({'token': token, 'user': user.to_dict()})


@api.route('/logout/', methods=['POST'])
def logout():
    token = TokenManager.extract_from_header(request.headers.get('Authorization'))
    if token is None:
        abort(401, description='No token provided')
    # revoking an unknown token still succeeds
    get_storage().revoke_token(token)
    get_audit_logger().log_event('logout', {})
    return jsonify({'message': 'Successfully logged out'})


@api.route('/candidates/', methods=['GET'])
@token_required
def candidates():
    return jsonify([c.to_dict() for c in get_storage().list_candidates()])


@api.route('/vote/', methods=['POST'])
@token_required
def vote():
    data = validator.validate_vote(request.get_json(silent=True))
    audit = get_audit_logger()
    try:
        cast = get_storage().cast_vote(g.user.id, data['candidate'])
    except AlreadyVoted:
        audit.log_event('duplicate_vote_attempt', {}, g.user.id)
        raise
    except UnknownCandidate:
        audit.log_event('invalid_vote_attempt', {'candidate': data['candidate']}, g.user.id)
        raise
    audit.log_event('vote_cast', {'vote_id': cast.id}, g.user.id)
    current_app.logger.info("Vote %s cast by user %s", cast.id, g.user.id)
    return jsonify(cast.to_dict()), 201


@api.route('/results/', methods=['GET'])
@token_required
def results():
    return jsonify([v.to_dict() for v in get_storage().tally()])


@api.route('/results/summary/', methods=['GET'])
@token_required
def results_summary():
    return jsonify([r.to_dict() for r in get_storage().results()])


@api.route('/status/', methods=['GET'])
@token_required
def status():
    body = g.user.to_dict()
    body['active_sessions'] = get_storage().active_sessions(g.user.id)
    return jsonify(body)
