import logging
import threading
from typing import Optional

from flask import Blueprint
from flask import current_app
from flask import Flask
from flask import request
from flask.helpers import make_response
from werkzeug.serving import make_server

from fedentity.defaults import ENTITY_CONFIGURATION_CONTENT_TYPE
from fedentity.defaults import FEDERATION_ENDPOINTS
from fedentity.exception import FedEntityError

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

federation = Blueprint('federation', __name__, url_prefix='')


@federation.route(FEDERATION_ENDPOINTS["entity_configuration"]["path"], methods=ALL_METHODS)
def entity_configuration():
    if request.method != "GET":
        return make_response("only GET is allowed", 405)

    _entity = current_app.federation_entity
    try:
        _jws = _entity.current_configuration()
    except FedEntityError as err:
        current_app.logger.error(f"Failed to produce entity configuration: {err}")
        return make_response(str(err), 500)

    # All JWSes MUST use compact serialization
    # https://openid.net/specs/openid-federation-1_0-41.html#name-requirements-notation-and-c
    response = make_response(_jws, 200)
    response.headers["Content-Type"] = ENTITY_CONFIGURATION_CONTENT_TYPE
    return response


@federation.route(FEDERATION_ENDPOINTS["fetch"]["path"], methods=ALL_METHODS)
def fetch():
    raise NotImplementedError("federation fetch endpoint")


@federation.route(FEDERATION_ENDPOINTS["list"]["path"], methods=ALL_METHODS)
def list_subordinates():
    raise NotImplementedError("federation list endpoint")


@federation.route(FEDERATION_ENDPOINTS["resolve"]["path"], methods=ALL_METHODS)
def resolve():
    raise NotImplementedError("federation resolve endpoint")


def make_app(entity, name: Optional[str] = None, **kwargs) -> Flask:
    """
    :param entity: The :py:class:`fedentity.entity.Entity` whose endpoints are served
    :param name: Application name
    :return: A Flask application
    """
    name = name or __name__
    app = Flask(name, static_url_path='', **kwargs)
    app.register_blueprint(federation)
    app.federation_entity = entity
    return app


class ServingHandle(object):
    """
    Owns the listening socket and the thread serving requests. Returned by
    :py:meth:`fedentity.entity.Entity.serve`.
    """

    def __init__(self, entity, host: Optional[str] = "0.0.0.0", port: Optional[int] = 443):
        self.entity = entity
        self.app = make_app(entity)
        # Requests are handled one at a time on the serving thread, so when the loop has
        # exited no request is in flight.
        self._server = make_server(host, port, self.app)
        self.host = host
        self.port = self._server.server_port
        self._stopping = threading.Event()
        self._thread = threading.Thread(target=self._serve,
                                        name=f"fedentity-{self.port}",
                                        daemon=True)
        self._thread.start()
        logger.info(f"Serving federation endpoints of {entity.entity_id} on {host}:{self.port}")

    def _serve(self):
        try:
            self._server.serve_forever()
        except (OSError, ValueError) as err:
            # A socket closed by stop() is not an error
            if not self._stopping.is_set():
                logger.error(f"Federation endpoint server failed: {err}")

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def wait(self, timeout: Optional[float] = None):
        """Blocks until the serving thread has exited."""
        self._thread.join(timeout)

    def stop(self):
        """
        Closes the listening socket and waits for the serving thread to exit.
        """
        if self._stopping.is_set():
            return

        self._stopping.set()
        self._server.shutdown()
        self._server.server_close()
        self._thread.join()
        logger.info(f"Stopped serving federation endpoints of {self.entity.entity_id}")
