from blinker import Namespace

_dato = Namespace()

before_create = _dato.signal('before-create')

after_create = _dato.signal('after-create')

before_update = _dato.signal('before-update')

after_update = _dato.signal('after-update')

before_destroy = _dato.signal('before-destroy')

after_destroy = _dato.signal('after-destroy')
