from etcd_rest.common_ops import CommonOps
from etcd_rest.request import (AtomicOp, Param, DIR, PREV_INDEX, RECURSIVE,
                               SORTED, TTL, VALUE)


class DirectoryOps(CommonOps):
    """Functions specific to directories, including the in-order keys used to
    build queues."""

    def create(self, path, ttl=None):
        """Create an empty directory.

        :param path: Directory
        :type path: string

        :param ttl: Seconds until the directory expires
        :type ttl: int or None

        :rtype: :class:`etcd_rest.response.Result`
        """

        data = [Param(DIR, True)]
        if ttl is not None:
            data.append(Param(TTL, ttl))

        fq_path = self.get_fq_node_path(path)
        return self.client.send('put', fq_path, data=data)

    def list(self, path, recursive=False, sorted=False):
        """List the children of a directory.

        :rtype: :class:`etcd_rest.response.Result`
        """

        return self.client.node.get(path, recursive=recursive, sorted=sorted)

    def delete(self, path, recursive=False):
        """Delete a directory. Without `recursive` the store refuses a
        non-empty one.

        :rtype: :class:`etcd_rest.response.Result`
        """

        parameters = [Param(DIR, True), Param(RECURSIVE, recursive)]

        fq_path = self.get_fq_node_path(path)
        return self.client.send('delete', fq_path, parameters=parameters)

    def delete_recursive(self, path):
        return self.delete(path, recursive=True)

    def delete_if_index(self, path, current_index):
        """Delete an empty directory if it's unchanged since `current_index`.
        """

        parameters = [Param(DIR, True), AtomicOp(PREV_INDEX, current_index)]

        fq_path = self.get_fq_node_path(path)
        return self.client.send('delete', fq_path, parameters=parameters)

    def append(self, path, value, ttl=None):
        """Create a child with a store-assigned, strictly increasing key.

        :returns: Result whose node is the new child
        :rtype: :class:`etcd_rest.response.Result`
        """

        data = [Param(VALUE, value)]
        if ttl is not None:
            data.append(Param(TTL, ttl))

        fq_path = self.get_fq_node_path(path)
        return self.client.send('post', fq_path, data=data)

    def ordered(self, path):
        """List the in-order children of a directory, sorted by key.

        :rtype: :class:`etcd_rest.response.Result`
        """

        parameters = [Param(RECURSIVE, True), Param(SORTED, True)]

        fq_path = self.get_fq_node_path(path)
        return self.client.send('get', fq_path, parameters=parameters)

    def document(self, path):
        """Return the whole subtree as nested dictionaries.

        :rtype: dict
        """

        result = self.list(path, recursive=True, sorted=True)
        return result.node.to_document()
