import logging

from etcd_rest.common_ops import CommonOps
from etcd_rest.exceptions import EtcdMalformedResponseError
from etcd_rest.headers import EtcdIndexHeader
from etcd_rest.request import (AtomicOp, Param, PREV_EXIST, PREV_INDEX,
                               PREV_VALUE, RECURSIVE, SORTED, TTL, VALUE, WAIT,
                               WAIT_INDEX)

_logger = logging.getLogger(__name__)


def _value_data(value, ttl):
    data = [Param(VALUE, value)]
    if ttl is not None:
        data.append(Param(TTL, ttl))
    return data


class NodeOps(CommonOps):
    """Functions for reading, writing, deleting and watching individual keys.
    Every function returns the decoded :class:`etcd_rest.response.Result`, so
    both the new and the previous node are available to the caller."""

    def get(self, path, recursive=False, sorted=False):
        """Get the node at the given path.

        :param path: Key
        :type path: string

        :param recursive: Include all descendants of a directory
        :type recursive: bool

        :param sorted: Order children by key
        :type sorted: bool

        :rtype: :class:`etcd_rest.response.Result`
        """

        parameters = []
        if recursive:
            parameters.append(Param(RECURSIVE, True))
        if sorted:
            parameters.append(Param(SORTED, True))

        fq_path = self.get_fq_node_path(path)
        return self.client.send('get', fq_path, parameters=parameters)

    def set(self, path, value, ttl=None, atomic=None):
        """Write a value, optionally guarded by conditions.

        :param path: Key
        :type path: string

        :param value: Value; converted to text
        :type value: scalar

        :param ttl: Seconds until the key expires
        :type ttl: int or None

        :param atomic: Conditions the store must verify before writing
        :type atomic: sequence of :class:`etcd_rest.request.AtomicOp` or None

        :rtype: :class:`etcd_rest.response.Result`
        """

        fq_path = self.get_fq_node_path(path)
        return self.client.send('put', fq_path,
                                parameters=list(atomic or ()),
                                data=_value_data(value, ttl))

    def create_only(self, path, value, ttl=None):
        """Write a value only if the key doesn't exist yet."""

        return self.set(path, value, ttl,
                        atomic=[AtomicOp(PREV_EXIST, False)])

    def update_only(self, path, value, ttl=None):
        """Write a value only if the key already exists."""

        return self.set(path, value, ttl,
                        atomic=[AtomicOp(PREV_EXIST, True)])

    def update_if_value(self, path, value, current_value, ttl=None):
        return self.set(path, value, ttl,
                        atomic=[AtomicOp(PREV_VALUE, current_value)])

    def update_if_index(self, path, value, current_index, ttl=None):
        return self.set(path, value, ttl,
                        atomic=[AtomicOp(PREV_INDEX, current_index)])

    def compare_and_swap(self, path, value, current_value=None,
                         current_index=None, prev_exists=None, ttl=None):
        """Write a value if every given condition holds. Conditions are sent
        in the order value, index, existence.

        :raises: ValueError if no condition is given
        :rtype: :class:`etcd_rest.response.Result`
        """

        atomic = []
        if current_value is not None:
            atomic.append(AtomicOp(PREV_VALUE, current_value))
        if current_index is not None:
            atomic.append(AtomicOp(PREV_INDEX, current_index))
        if prev_exists is not None:
            atomic.append(AtomicOp(PREV_EXIST, prev_exists))

        if not atomic:
            raise ValueError("compare_and_swap() requires at least one "
                             "condition.")

        return self.set(path, value, ttl, atomic=atomic)

    def delete(self, path, atomic=None):
        """Delete a key. A non-empty directory is refused by the store.

        :rtype: :class:`etcd_rest.response.Result`
        """

        fq_path = self.get_fq_node_path(path)
        return self.client.send('delete', fq_path,
                                parameters=list(atomic or ()))

    def delete_if_value(self, path, current_value):
        return self.delete(path, atomic=[AtomicOp(PREV_VALUE, current_value)])

    def delete_if_index(self, path, current_index):
        return self.delete(path, atomic=[AtomicOp(PREV_INDEX, current_index)])

    def wait(self, path, wait_index=None, recursive=False, timeout=None):
        """Block until the key (or, if recursive, anything under it) changes.

        :param wait_index: Return the first change at or after this index,
                           even if it already happened
        :type wait_index: int or None

        :param timeout: Seconds before the transport gives up; defaults to
                        the client's timeout
        :type timeout: float or None

        :raises: :class:`etcd_rest.exceptions.EtcdTransportError` when the
                 connection drops or the deadline passes
        :rtype: :class:`etcd_rest.response.Result`
        """

        parameters = [Param(WAIT, True)]
        if wait_index is not None:
            parameters.append(Param(WAIT_INDEX, wait_index))
        if recursive:
            parameters.append(Param(RECURSIVE, True))

        fq_path = self.get_fq_node_path(path)
        _logger.debug("Waiting on [%s] from index (%s).", fq_path, wait_index)

        return self.client.send('get', fq_path, parameters=parameters,
                                timeout=timeout)

    def changes(self, path, start_index=None, recursive=False, timeout=None):
        """Yield every change of the key, in order, resuming each wait just
        after the change last seen so none are missed between calls.

        Runs until the caller stops iterating or a wait fails. A change that
        carries neither a node nor an index header cannot be resumed from and
        raises :class:`etcd_rest.exceptions.EtcdMalformedResponseError`.

        :rtype: generator of :class:`etcd_rest.response.Result`
        """

        wait_index = start_index
        while True:
            result = self.wait(path, wait_index, recursive, timeout)
            yield result

            if result.node is not None:
                wait_index = result.node.modified_index + 1
            elif result.etcd_index > 0:
                wait_index = result.etcd_index + 1
            else:
                raise EtcdMalformedResponseError(
                    EtcdIndexHeader.name(),
                    'missing from a change on [{}] without a node'.format(path))
