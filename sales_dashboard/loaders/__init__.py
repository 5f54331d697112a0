# sales_dashboard/loaders/__init__.py
from importlib import import_module

from sales_dashboard.loaders.base import BaseLoader, FetchError


def loader_key(source):
    return 'http' if source.lower().startswith(('http://', 'https://')) else 'file'


def get_loader(source, config):
    loader_path = config['loaders'][loader_key(source)]
    module_name, cls_name = loader_path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(config)


__all__ = ['BaseLoader', 'FetchError', 'get_loader', 'loader_key']
