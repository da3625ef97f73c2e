"""
# pngchunk: PNG files as lists of chunks.

A PNG file is an eight bytes signature followed by chunks, each of them being

 1. the length of the data as big-endian 32 bits integer
 2. the type, four ASCII letters whose case encodes some properties
 3. the data
 4. the CRC-32 of type and data

Two basic main operations are defined for the file and its chunks:

 1. unpack(): reading the binary data and build a high-level representation of that,
    failing loudly if the signature, the framing or the CRC is wrong.

 2. pack(): encode the high-level representation into binary data.

In between the chunks of a file can be looked up, appended and removed, for
example to hide a message inside an ancillary chunk the image viewers skip.
"""
